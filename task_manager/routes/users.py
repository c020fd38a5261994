import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from task_manager.auth.deps import get_current_user, require_self_or_admin
from task_manager.auth.passwords import hash_password
from task_manager.db import commit, get_db
from task_manager.errors import Conflict, NotFound
from task_manager.integrity.guards import enforce_user_unassigned
from task_manager.models.user import User
from task_manager.schemas.users import UserCreateIn, UserOut, UserUpdateIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

def _out(u: User) -> UserOut:
    return UserOut(
        id=u.id,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        created_at=u.created_at,
    )

def _get_or_404(db: Session, user_id: int) -> User:
    u = db.get(User, user_id)
    if u is None:
        raise NotFound("User", user_id)
    return u

def _ensure_email_free(db: Session, email: str, user_id: int | None = None) -> None:
    existing = db.scalar(select(User).where(User.email == email))
    if existing is not None and existing.id != user_id:
        raise Conflict(f"User with email {email} already exists")

@router.get("", response_model=list[UserOut])
def list_users(
    response: Response,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[UserOut]:
    rows = db.scalars(select(User).order_by(User.id)).all()
    response.headers["X-Total-Count"] = str(len(rows))
    return [_out(u) for u in rows]

@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserOut:
    return _out(_get_or_404(db, user_id))

# registration, open to anonymous callers
@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreateIn, db: Session = Depends(get_db)) -> UserOut:
    email = payload.email.lower().strip()
    _ensure_email_free(db, email)

    u = User(
        email=email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        password_hash=hash_password(payload.password),
    )
    db.add(u)
    commit(db)
    db.refresh(u)
    logger.info("user created id=%s", u.id)
    return _out(u)

@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdateIn,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> UserOut:
    u = _get_or_404(db, user_id)

    if payload.email is not None:
        email = payload.email.lower().strip()
        _ensure_email_free(db, email, user_id=u.id)
        u.email = email
    if payload.first_name is not None:
        u.first_name = payload.first_name
    if payload.last_name is not None:
        u.last_name = payload.last_name
    if payload.password is not None:
        u.password_hash = hash_password(payload.password)

    db.add(u)
    commit(db)
    db.refresh(u)
    return _out(u)

@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> Response:
    u = _get_or_404(db, user_id)
    enforce_user_unassigned(db, u.id)
    db.delete(u)
    commit(db)
    logger.info("user deleted id=%s", user_id)
    return Response(status_code=204)
