from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AddDemoNumberRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    phone_number: str = Field(min_length=1)
