from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class TaskCreateIn(BaseModel):
    title: str | None = Field(
        default=None, max_length=300, validation_alias=AliasChoices("title", "name")
    )
    content: str | None = Field(
        default=None, validation_alias=AliasChoices("content", "description")
    )
    status_id: int | None = Field(
        default=None, validation_alias=AliasChoices("statusId", "status_id")
    )
    # status slug
    status: str | None = None
    assignee_id: int | None = Field(
        default=None, validation_alias=AliasChoices("assigneeId", "assignee_id")
    )
    label_ids: list[int] | None = Field(
        default=None, validation_alias=AliasChoices("labelIds", "taskLabelIds", "label_ids")
    )

class TaskUpdateIn(TaskCreateIn):
    # same body; only keys present in model_fields_set are applied
    pass

class TaskOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    content: str
    status: str
    status_id: int
    assignee_id: int | None
    label_ids: list[int]
    created_at: datetime
