"""Turn untrusted mappings (CLI JSON files, API payloads) into spec models."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from ffbridge.errors import InvalidSpec, UnsupportedVariant

ModelT = TypeVar("ModelT", bound=BaseModel)


def _location(loc: tuple[Any, ...]) -> str:
    # Drop pydantic's synthetic union branch names such as "tagged-union[...]".
    parts = [str(part) for part in loc if "[" not in str(part)]
    return ".".join(parts) or "<root>"


def load_spec(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """
    Validate ``data`` against ``model``.

    Raises:
        UnsupportedVariant: if a codec/mode tag is not one of the known variants.
        InvalidSpec: for any other structural problem.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors()
        for err in errors:
            if err["type"] == "union_tag_invalid":
                tag = err.get("ctx", {}).get("tag", err.get("input"))
                raise UnsupportedVariant(_location(err["loc"]), tag) from exc
        details = "; ".join(f"{_location(e['loc'])}: {e['msg']}" for e in errors)
        raise InvalidSpec(f"Invalid {model.__name__}: {details}") from exc
