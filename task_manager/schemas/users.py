from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

class _CamelIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class UserCreateIn(_CamelIn):
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    password: str = Field(min_length=3)

class UserUpdateIn(_CamelIn):
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = Field(default=None, min_length=3)

class UserOut(_CamelIn):
    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
