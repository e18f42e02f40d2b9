"""Turn pydantic validation failures into ValidationError with field details."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from resource_hub.core.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)

# Leading loc segments FastAPI adds for request parts
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts) or "request body"


def _is_missing(error: Mapping[str, Any]) -> bool:
    if error.get("type") == "missing":
        return True
    # Blank strings count as not provided
    ctx = error.get("ctx") or {}
    return error.get("type") == "string_too_short" and ctx.get("min_length") == 1


def _human_join(names: list[str]) -> str:
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return ", ".join(names[:-1]) + f", and {names[-1]}"


def describe_errors(errors: Sequence[Mapping[str, Any]]) -> tuple[str, list[dict[str, Any]]]:
    """Build (message, details) from a pydantic/FastAPI error list.

    Missing fields are summarised in one "Please provide ..." message;
    otherwise the first violation becomes the message. Details always list
    every violated field.
    """
    details = [
        {
            "field": _field_name(error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        }
        for error in errors
    ]
    missing = [d["field"] for d, e in zip(details, errors) if _is_missing(e)]
    if missing:
        return f"Please provide {_human_join(missing)}", details
    if details:
        first = details[0]
        return f"Invalid {first['field']}: {first['message']}", details
    return ValidationError.default_message, details


def validate_payload(model_cls: Type[M], data: Mapping[str, Any]) -> M:
    """Validate ``data`` against ``model_cls`` or raise ValidationError."""
    try:
        return model_cls.model_validate(dict(data))
    except PydanticValidationError as exc:
        message, details = describe_errors(exc.errors())
        raise ValidationError(message, details=details) from None


def provided(**fields: Any) -> dict[str, Any]:
    """Keyword arguments minus those left as None, so they report as missing."""
    return {name: value for name, value in fields.items() if value is not None}
