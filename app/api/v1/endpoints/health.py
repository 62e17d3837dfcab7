import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.db.session import get_db
from app.core.errors import ServerError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Liveness probe. Also round-trips to the store, so a dead database reports 500.
    """
    try:
        db.exec(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        raise ServerError("Database unavailable")
    return {"success": True, "status": "ok"}
