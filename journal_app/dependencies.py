# fastapi dependency injection
# provides get_current_user, the journal store and today's window

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from journal_app.config import settings
from journal_app.services.auth_service import decode_token
from journal_app.services.completion import DayWindow
from journal_app.services.db import Database, get_db
from journal_app.services.journal_store import JournalStore

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """extract and validate the current user from the jwt bearer token"""
    payload = decode_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing subject",
        )

    return {"id": user_id}


async def get_store(db: Database = Depends(get_db)) -> JournalStore:
    return JournalStore(db)


def get_day_window() -> DayWindow:
    """local midnight to now in the configured journal timezone"""
    return DayWindow.today(settings.JOURNAL_TIMEZONE)
