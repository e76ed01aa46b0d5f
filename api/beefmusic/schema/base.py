"""Shared schema base classes for API responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ORMModel(BaseModel):
    """Base model that reads attributes straight off SQLAlchemy rows."""

    model_config = ConfigDict(from_attributes=True)


class CamelModel(BaseModel):
    """Response model serialized with the camelCase keys the web client expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
