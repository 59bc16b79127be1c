from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_user, get_access_context
from app.core.logging import logger
from app.schemas.auth import AccessOut, LoginIn, PageAccessOut, TokenOut, UserOut
from app.crud.users import get_user_by_login
from app.core.security import verify_password, create_access_token
from app.services.access.permissions import AccessContext, Page, allowed_actions, is_elevated

router = APIRouter()

@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    user = get_user_by_login(db, data.login)
    if not user or not user.is_active or not verify_password(data.password, user.password_hash):
        logger.info("login_failed", login=data.login)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(sub=user.login, role=user.role)
    return TokenOut(access_token=token)

@router.get("/me", response_model=UserOut)
def me(user = Depends(get_current_user)):
    return UserOut(id=user.id, login=user.login, full_name=user.full_name, role=user.role)

@router.get("/me/access", response_model=AccessOut)
def my_access(ctx: AccessContext = Depends(get_access_context)):
    """Per-page allowed actions, so the client can guard pages and hide buttons."""
    pages = [PageAccessOut(page=p.value, actions=sorted(allowed_actions(ctx, p), key=lambda a: a.value)) for p in Page]
    return AccessOut(
        user_id=ctx.user_id,
        role=ctx.role.value if ctx.role else None,
        elevated=is_elevated(ctx.role),
        pages=pages,
    )
