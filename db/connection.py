from fastapi import Depends
from sqlalchemy.orm import Session
from .database import engine, SessionLocal, Base
from typing import Annotated
import models.userModels  # noqa: F401  registers users on Base
import models.videoModels  # noqa: F401  registers videos on Base
import models.engagementModels  # noqa: F401  registers video_likes / follows on Base


def create_tables():
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


db_dependency = Annotated[Session, Depends(get_db)]
