from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from skill_exchange.config import mask_db_url
from skill_exchange.database import Database, get_database


router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


class DBHealthStatus(BaseModel):
    database: str
    db_url: str
    timestamp: datetime


@router.get("", response_model=HealthStatus, summary="API heartbeat")
def health_check() -> HealthStatus:
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


@router.get("/db", response_model=DBHealthStatus, summary="DB connectivity check")
def db_health_check(db: Database = Depends(get_database)) -> DBHealthStatus:
    db_status = "ok"
    try:
        db.ping()
    except SQLAlchemyError:
        db_status = "error"

    return DBHealthStatus(
        database=db_status,
        db_url=mask_db_url(db.db_url),
        timestamp=datetime.now(timezone.utc),
    )
