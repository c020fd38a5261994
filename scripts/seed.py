from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from task_manager.auth.passwords import hash_password
from task_manager.config import settings
from task_manager.db import SessionLocal, create_tables
from task_manager.models.label import Label
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User

DEFAULT_LABELS = ("feature", "bug")
DEFAULT_STATUSES = (
    ("Draft", "draft"),
    ("To review", "to_review"),
    ("To be fixed", "to_be_fixed"),
    ("To publish", "to_publish"),
    ("Published", "published"),
)

@dataclass
class SeedResult:
    admin_email: str
    labels: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)

def get_or_create_admin(db: Session, email: str, password: str) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(
            email=email,
            first_name="Hexlet",
            last_name="Admin",
            password_hash=hash_password(password),
        )
        db.add(u)
        db.flush()
    return u

def get_or_create_label(db: Session, name: str) -> Label:
    label = db.scalar(select(Label).where(Label.name == name))
    if label is None:
        label = Label(name=name)
        db.add(label)
        db.flush()
    return label

def get_or_create_status(db: Session, name: str, slug: str) -> TaskStatus:
    # slug is the stable key; keep an existing row's name as is
    s = db.scalar(select(TaskStatus).where(TaskStatus.slug == slug))
    if s is None:
        s = TaskStatus(name=name, slug=slug)
        db.add(s)
        db.flush()
    return s

def seed_defaults(db: Session) -> SeedResult:
    admin = get_or_create_admin(db, settings.admin_email, settings.admin_password)
    labels = [get_or_create_label(db, name) for name in DEFAULT_LABELS]
    statuses = [get_or_create_status(db, name, slug) for name, slug in DEFAULT_STATUSES]

    db.commit()

    return SeedResult(
        admin_email=admin.email,
        labels=[label.name for label in labels],
        statuses=[s.slug for s in statuses],
    )

def seed() -> SeedResult:
    create_tables()
    db = SessionLocal()
    try:
        return seed_defaults(db)
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"admin: {r.admin_email}")
    print(f"labels: {', '.join(r.labels)}")
    print(f"statuses: {', '.join(r.statuses)}")
