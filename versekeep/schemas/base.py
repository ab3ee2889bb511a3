from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for persisted entities and API payloads.

    Fields are snake_case in Python and camelCase on the wire and in storage,
    which keeps stored collections readable by the mobile client.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
