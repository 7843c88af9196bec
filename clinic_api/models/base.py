from typing import Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from clinic_api.errors import ValidationFailed


M = TypeVar("M", bound="Payload")


class Payload(BaseModel):
    """Request body schema. JSON uses camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True, allow_inf_nan=False)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _loc(loc) -> str:
    return ".".join(str(part) for part in loc)


def validate_payload(model: Type[M], data) -> M:
    """
    Validate a JSON body against `model`.

    Missing top-level fields are reported together ("age, gender are required")
    before anything else; other problems surface as the first pydantic error.
    """
    if not isinstance(data, dict):
        data = {}

    missing = [
        field.alias or name
        for name, field in model.model_fields.items()
        if field.is_required() and _is_blank(data.get(field.alias or name, data.get(name)))
    ]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise ValidationFailed(f"{', '.join(missing)} {verb} required")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        if first["type"] == "missing":
            raise ValidationFailed(f"{_loc(first['loc'])} is required") from e
        raise ValidationFailed(f"{_loc(first['loc'])}: {first['msg']}") from e
