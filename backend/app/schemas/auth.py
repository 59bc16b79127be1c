from pydantic import BaseModel

from app.services.access.permissions import Action

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginIn(BaseModel):
    login: str
    password: str

class UserOut(BaseModel):
    id: int
    login: str
    full_name: str | None = None
    role: str | None = None

class PageAccessOut(BaseModel):
    page: str
    actions: list[Action]

class AccessOut(BaseModel):
    user_id: int
    role: str | None = None
    elevated: bool
    pages: list[PageAccessOut]
