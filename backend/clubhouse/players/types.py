from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CreatePlayerRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    email: str | None = None
