import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from task_manager.auth.tokens import decode_access_token
from task_manager.config import settings
from task_manager.db import get_db
from task_manager.models.user import User

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if creds is None or creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="missing bearer token")

    try:
        payload = decode_access_token(creds.credentials)
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="invalid token")

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="user not found")

    return user

def is_admin(user: User) -> bool:
    return user.email.lower() == settings.admin_email.lower()

def require_self_or_admin(user_id: int, user: User = Depends(get_current_user)) -> User:
    # users may only edit or delete themselves unless they are the admin
    if user.id != user_id and not is_admin(user):
        raise HTTPException(status_code=403, detail="forbidden")
    return user
