from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.dialects.postgresql import insert

from app.db.models.user import UserPermission
from app.schemas.admin import PermissionIn
from app.services.access.permissions import PermissionGrant

def list_all_permissions(db: Session):
    return db.query(UserPermission).order_by(UserPermission.updated_at.desc(), UserPermission.id.desc()).all()

def list_user_permissions(db: Session, user_id: int):
    return db.query(UserPermission).filter(UserPermission.user_id == user_id).order_by(UserPermission.page_name).all()

def load_grants(db: Session, user_id: int) -> tuple[PermissionGrant, ...]:
    return tuple(PermissionGrant.from_row(p) for p in list_user_permissions(db, user_id))

def upsert_permission(db: Session, data: PermissionIn) -> UserPermission:
    flags = dict(
        can_view=data.can_view,
        can_create=data.can_create,
        can_edit=data.can_edit,
        can_delete=data.can_delete,
    )
    stmt = insert(UserPermission).values(
        user_id=data.user_id,
        page_name=data.page_name.value,
        **flags,
    ).on_conflict_do_update(
        constraint="uq_user_permission_user_page",
        set_=dict(updated_at=func.now(), **flags),
    ).returning(UserPermission.id)
    pid = db.execute(stmt).scalar_one()
    db.commit()
    return db.get(UserPermission, pid, populate_existing=True)

def delete_permission(db: Session, user_id: int, page_name: str) -> int:
    n = (
        db.query(UserPermission)
        .filter(UserPermission.user_id == user_id, UserPermission.page_name == page_name)
        .delete(synchronize_session=False)
    )
    db.commit()
    return n
