from pydantic import BaseModel

class LoginIn(BaseModel):
    # the login identity is the user's email
    username: str
    password: str

class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"
