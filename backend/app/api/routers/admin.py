from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_page, require_roles
from app.core.logging import logger
from app.schemas.admin import PermissionIn, PermissionOut, RoleIn, UserAdminOut, UserCreateIn
from app.crud.users import create_user, get_user, get_user_by_login, list_users, set_user_role
from app.crud.permissions import delete_permission, list_all_permissions, list_user_permissions, upsert_permission
from app.services.access.permissions import Action, Page, Role, parse_page

router = APIRouter()

@router.get("/users", response_model=list[UserAdminOut])
def users(db: Session = Depends(get_db), _ctx=Depends(require_page(Page.settings))):
    return list_users(db)

@router.post("/users", response_model=UserAdminOut)
def create_user_endpoint(data: UserCreateIn, db: Session = Depends(get_db), _ctx=Depends(require_roles(Role.system_admin))):
    if get_user_by_login(db, data.login):
        raise HTTPException(status_code=409, detail="Login already exists")
    return create_user(db, data)

@router.put("/users/{user_id}/role", response_model=UserAdminOut)
def put_user_role(
    user_id: int,
    data: RoleIn,
    db: Session = Depends(get_db),
    ctx=Depends(require_roles(Role.system_admin)),
):
    u = get_user(db, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    u = set_user_role(db, u, data.role)
    logger.info("user_role_changed", user_id=user_id, role=u.role, by=ctx.user_id)
    return u

@router.get("/permissions", response_model=list[PermissionOut])
def permissions(
    user_id: int | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.settings)),
):
    if user_id is not None:
        return list_user_permissions(db, user_id)
    return list_all_permissions(db)

@router.put("/permissions", response_model=PermissionOut)
def put_permission(data: PermissionIn, db: Session = Depends(get_db), ctx=Depends(require_page(Page.settings, Action.edit))):
    if not get_user(db, data.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    p = upsert_permission(db, data)
    logger.info("permission_upserted", user_id=data.user_id, page=data.page_name.value, by=ctx.user_id)
    return p

@router.delete("/permissions/{user_id}/{page_name}")
def remove_permission(
    user_id: int,
    page_name: str,
    db: Session = Depends(get_db),
    ctx=Depends(require_page(Page.settings, Action.delete)),
):
    page = parse_page(page_name)
    if page is None:
        raise HTTPException(status_code=404, detail="Unknown page")
    if not delete_permission(db, user_id, page.value):
        raise HTTPException(status_code=404, detail="Permission not found")
    logger.info("permission_deleted", user_id=user_id, page=page.value, by=ctx.user_id)
    return {"status": "ok"}
