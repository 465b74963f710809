from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire. Either casing is accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def reject_null(value):
    """Partial updates may omit a NOT NULL column but may not set it to null."""
    if value is None:
        raise ValueError("may not be null")
    return value
