"""Shared base for models serialized to the dashboard API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose aliases are camelCase; populate by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
