"""
core/schemas.py: Core/general Pydantic schemas.

The JSON wire format is camelCase (``colorName``, ``isAdmin``) while Python
attributes stay snake_case; CamelModel bridges the two for every domain schema.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from core.errors import ValidationError


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase keys, JSON-safe values."""
        return self.model_dump(by_alias=True, mode="json")


def validate_body(model: type[BaseModel], data: Any) -> Any:
    """Validate a free-form request body against a schema, raising a 400 ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        raise ValidationError(message)


class HealthCheck(BaseModel):
    status: str = "ok"
    version: str


class ImportResult(BaseModel):
    """Outcome of a line-at-a-time bulk import."""
    created: int = 0
    duplicates: int = 0
    errors: int = 0


class CsvImportRequest(CamelModel):
    """Body of a ``?import=csv`` request."""
    csv_data: str
