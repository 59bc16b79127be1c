from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.core.logging import logger
from app.core.security import token_subject
from app.db.models.user import User
from app.crud.users import get_user_by_login
from app.crud.permissions import load_grants
from app.services.access.permissions import (
    ACCESS_DENIED_MESSAGE,
    AccessContext,
    Action,
    Page,
    Role,
    check_permission,
    parse_role,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    login = token_subject(token)
    if login is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = get_user_by_login(db, login)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found/disabled")
    return user

def get_access_context(db: Session = Depends(get_db), user: User = Depends(get_current_user)) -> AccessContext:
    return AccessContext(user_id=user.id, role=parse_role(user.role), grants=load_grants(db, user.id))

def require_page(page: Page, action: Action = Action.view):
    def _dep(ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        if not check_permission(ctx.role, ctx.grants, ctx.user_id, page, action):
            logger.info("permission_denied", user_id=ctx.user_id, page=page.value, action=action.value)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED_MESSAGE)
        return ctx
    return _dep

def require_roles(*roles: Role):
    def _dep(ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        if ctx.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED_MESSAGE)
        return ctx
    return _dep
