from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

import task_manager.models  # noqa: F401  registers every mapper on Base
from task_manager.config import settings
from task_manager.models.base import Base

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def commit(db: Session) -> None:
    # leave the session usable when a constraint rejects the write
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise

def create_tables() -> None:
    Base.metadata.create_all(bind=engine)

# db connectivity check
def db_ping() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
