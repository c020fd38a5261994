from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class LabelIn(BaseModel):
    name: str = Field(min_length=3, max_length=1000)

class LabelOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    created_at: datetime
