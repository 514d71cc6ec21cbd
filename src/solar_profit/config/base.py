"""Shared model base — camelCase JSON, snake_case Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every model that crosses the JSON boundary.

    Fields are declared in snake_case and serialized with camelCase aliases
    (``capacity_kw`` ↔ ``capacityKw``).  Either spelling is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable variant for inputs and results that must not change after construction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
