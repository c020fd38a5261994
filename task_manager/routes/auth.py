import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from task_manager.auth.passwords import verify_password
from task_manager.auth.tokens import issue_access_token
from task_manager.config import settings
from task_manager.db import get_db
from task_manager.models.user import User
from task_manager.ratelimit import rate_limit
from task_manager.schemas.auth import LoginIn, TokenOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/login", response_model=TokenOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_login_per_min,
            window_seconds=60,
        )
    ),
) -> TokenOut:
    email = payload.username.lower().strip()

    user = db.scalar(select(User).where(User.email == email))
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("failed login for %s", email)
        raise HTTPException(status_code=401, detail="invalid credentials")

    return TokenOut(token=issue_access_token(user.id, user.email))
