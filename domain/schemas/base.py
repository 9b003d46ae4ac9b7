"""
Helpers shared by the input schemas: parsing caller input and reading patches.
"""

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from app.exceptions import ServiceValidationError

InputType = TypeVar("InputType", bound=BaseModel)


class InputSchema(BaseModel):
    """Accepts both snake_case and camelCase keys (``prep_time`` or ``prepTime``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_input(model: Type[InputType], data: Any, entity: str) -> InputType:
    """Build ``model`` from a model instance or mapping.

    Type errors become a ServiceValidationError listing every bad field, so a
    malformed payload never reaches the invariant checks or the database.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ServiceValidationError(entity, format_errors(exc)) from exc


def format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        messages.append(f"{path}: {err['msg']}" if path else err["msg"])
    return messages


def patch_fields(patch: BaseModel, exclude: tuple = ("id",)) -> Dict[str, Any]:
    """Fields the caller actually supplied, including ones explicitly set to None."""
    return {
        name: getattr(patch, name)
        for name in patch.model_fields_set
        if name not in exclude
    }
