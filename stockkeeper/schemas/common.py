from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase keys on the wire and on disk."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class StoredRecord(CamelModel):
    """Response shape for stored records; unknown keys pass through untouched."""

    class Config:
        extra = "allow"
