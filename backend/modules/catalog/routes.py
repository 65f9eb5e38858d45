"""Reference list endpoints: one router per list, built from its ReferenceKind."""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import get_current_user
from core.responses import attachment
from core.schemas import CsvImportRequest, validate_body
from modules.catalog.schemas import OrderUpdate
from modules.catalog.services import (
    REFERENCE_KINDS, ReferenceKind, create_item, delete_item, import_csv, items_to_csv,
    list_items, update_order,
)

log = logging.getLogger("filadex.api")


def build_router(kind: ReferenceKind) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.path}", tags=["Catalog"])

    @router.get("")
    def list_reference_items(
        export: Optional[Literal["csv"]] = None,
        current_user: dict = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        items = list_items(db, kind)
        if export == "csv":
            return attachment(items_to_csv(kind, items), "text/csv", f"{kind.path}.csv")
        return [kind.response_schema.model_validate(i).to_json() for i in items]

    @router.post("", status_code=201)
    def create_reference_item(
        body: dict = Body(...),
        import_format: Optional[Literal["csv"]] = Query(default=None, alias="import"),
        current_user: dict = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        if import_format == "csv":
            payload = validate_body(CsvImportRequest, body)
            return import_csv(db, kind, payload.csv_data)
        data = validate_body(kind.create_schema, body)
        item = create_item(db, kind, data)
        return kind.response_schema.model_validate(item).to_json()

    @router.delete("/{item_id}", status_code=204)
    def delete_reference_item(
        item_id: int,
        current_user: dict = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        delete_item(db, kind, item_id)
        log.info(f"{kind.label} {item_id} deleted by user {current_user['id']}")
        return Response(status_code=204)

    if kind.orderable:
        @router.patch("/{item_id}/order")
        def update_reference_order(
            item_id: int,
            body: dict = Body(...),
            current_user: dict = Depends(get_current_user),
            db: Session = Depends(get_db),
        ):
            data = validate_body(OrderUpdate, body)
            item = update_order(db, kind, item_id, data.new_order)
            return kind.response_schema.model_validate(item).to_json()

    return router


router = APIRouter()
for _kind in REFERENCE_KINDS:
    router.include_router(build_router(_kind))
