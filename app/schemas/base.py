"""
Base schemas with common functionality.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Type, TypeVar, Any

T = TypeVar('T', bound='BaseSchema')

class BaseSchema(BaseModel):
    """
    Base schema for all storefront payloads.
    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel
    )

    @classmethod
    def from_document(cls: Type[T], data: Any) -> T:
        """Create a schema instance from a stored document payload"""
        return cls.model_validate(data)

    def to_document(self) -> dict:
        """JSON-safe dict in the wire format, as stored in the document store"""
        return self.model_dump(mode="json", by_alias=True)
