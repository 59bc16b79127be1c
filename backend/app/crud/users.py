from sqlalchemy.orm import Session
from app.db.models.user import User
from app.core.security import hash_password
from app.schemas.admin import UserCreateIn
from app.services.access.permissions import Role

def get_user_by_login(db: Session, login: str) -> User | None:
    return db.query(User).filter(User.login == login).one_or_none()

def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).one_or_none()

def list_users(db: Session):
    return db.query(User).order_by(User.id).all()

def create_user(db: Session, data: UserCreateIn) -> User:
    u = User(
        login=data.login,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role.value if data.role else None,
        full_name=data.full_name,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u

def set_user_role(db: Session, u: User, role: Role | None) -> User:
    u.role = role.value if role else None
    db.commit()
    db.refresh(u)
    return u
