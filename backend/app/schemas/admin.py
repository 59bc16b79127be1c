import datetime as dt
from pydantic import BaseModel, ConfigDict, Field

from app.services.access.permissions import Page, Role

class UserCreateIn(BaseModel):
    login: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    role: Role | None = None
    email: str | None = None
    full_name: str | None = None

class UserAdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
    email: str | None = None
    full_name: str | None = None
    role: str | None = None
    is_active: bool

class RoleIn(BaseModel):
    # null removes the role
    role: Role | None = None

class PermissionIn(BaseModel):
    user_id: int
    page_name: Page
    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False

class PermissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    page_name: str
    can_view: bool
    can_create: bool
    can_edit: bool
    can_delete: bool
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
