"""Filament CRUD endpoints, plus CSV/JSON import and export on the collection."""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from core.db import get_db
from core.dependencies import client_ip, get_current_user, log_audit
from core.errors import ForbiddenError
from core.rbac import can_modify, check_can_modify
from core.responses import attachment
from core.schemas import CsvImportRequest, validate_body
from modules.inventory.schemas import (
    FilamentCreate, FilamentResponse, FilamentUpdate, JsonImportRequest,
)
from modules.inventory.services import (
    apply_update, build_filament, get_filament_or_404, list_filaments, replace_fields,
)
from modules.inventory.transfer import (
    filaments_to_csv, filaments_to_json, import_filaments_csv, import_filaments_json,
    parse_id_list,
)
from ._helpers import is_publicly_shared

log = logging.getLogger("filadex.api")
router = APIRouter(prefix="/filaments", tags=["Filaments"])


# ====================================================================
# Collection
# ====================================================================

@router.get("")
def get_filaments(
    ids: Optional[str] = Query(default=None, description="Comma-separated filament ids"),
    export: Optional[Literal["csv", "json"]] = None,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's filaments, optionally as a CSV or JSON download."""
    filaments = list_filaments(db, current_user["id"], parse_id_list(ids))

    if export == "csv":
        return attachment(filaments_to_csv(filaments), "text/csv", "filaments.csv")
    if export == "json":
        return attachment(filaments_to_json(filaments), "application/json", "filaments.json")
    return [FilamentResponse.model_validate(f).to_json() for f in filaments]


@router.post("", status_code=201)
def create_filament(
    request: Request,
    body: dict = Body(...),
    import_format: Optional[Literal["csv", "json"]] = Query(default=None, alias="import"),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create one filament, or bulk-import with ?import=csv {csvData} / ?import=json {jsonData}."""
    if import_format == "csv":
        payload = validate_body(CsvImportRequest, body)
        return import_filaments_csv(db, current_user["id"], payload.csv_data)
    if import_format == "json":
        payload = validate_body(JsonImportRequest, body)
        return import_filaments_json(db, current_user["id"], payload.json_data)

    data = validate_body(FilamentCreate, body)
    filament = build_filament(current_user["id"], data)
    db.add(filament)
    db.commit()
    db.refresh(filament)
    log.info(f"Filament {filament.id} created by user {current_user['id']} from {client_ip(request)}")
    return FilamentResponse.model_validate(filament).to_json()


# ====================================================================
# Single filament
# ====================================================================

@router.get("/{filament_id}")
def get_filament(
    filament_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filament = get_filament_or_404(db, filament_id)
    if not can_modify(current_user, filament.user_id) and not is_publicly_shared(db, filament):
        raise ForbiddenError("You do not have access to this filament")
    return FilamentResponse.model_validate(filament).to_json()


@router.patch("/{filament_id}")
def update_filament(
    filament_id: int,
    body: FilamentUpdate,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partial update: only the supplied keys are written."""
    filament = get_filament_or_404(db, filament_id)
    check_can_modify(current_user, filament.user_id)
    apply_update(filament, body)
    db.commit()
    db.refresh(filament)
    return FilamentResponse.model_validate(filament).to_json()


@router.put("/{filament_id}")
def replace_filament(
    filament_id: int,
    body: FilamentCreate,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filament = get_filament_or_404(db, filament_id)
    check_can_modify(current_user, filament.user_id)
    replace_fields(filament, body)
    db.commit()
    db.refresh(filament)
    return FilamentResponse.model_validate(filament).to_json()


@router.delete("/{filament_id}", status_code=204)
def delete_filament(
    filament_id: int,
    request: Request,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filament = get_filament_or_404(db, filament_id)
    check_can_modify(current_user, filament.user_id)
    log_audit(db, "filament.delete", "filament", filament.id, details={"name": filament.name},
              ip=client_ip(request), user_id=current_user["id"])
    db.delete(filament)
    db.commit()
    return Response(status_code=204)
