from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from utils.errors import ValidationError, validation_message

BodyT = TypeVar("BodyT", bound=BaseModel)


class CamelModel(BaseModel):
    """Read from ORM objects, write camelCase keys."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LenientBody(BaseModel):
    """
    Request body whose required-field checks happen in the controller,
    so a missing field is answered with the route's own status code.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="ignore",
        coerce_numbers_to_str=True,
        populate_by_name=True,
    )


def serialize(schema: Type[BaseModel], obj: Any) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def parse_body(schema: Type[BodyT], data: Dict[str, Any]) -> BodyT:
    """Validate a body already read by an admin gate; failures are a 400."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(validation_message(exc.errors()))
