"""
FastAPI dependencies shared by the route modules.

The store and STT handles live on ``app.state`` (set by ``create_app``);
routes reach them through these functions so tests can swap them.
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from echonote.core.config import Settings
from echonote.core.exceptions import UnauthorizedError
from echonote.services.storage.database import Database
from echonote.services.transcription.base import BaseSTT


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_stt(request: Request) -> BaseSTT:
    return request.app.state.stt


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_user_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Return the caller identity from the ``x-user-id`` header.

    The header is trusted as sent; it is not checked against any session.

    Raises:
        UnauthorizedError: If the header is missing or blank.
    """
    if x_user_id is None or not x_user_id.strip():
        raise UnauthorizedError()
    return x_user_id.strip()


UserId = Annotated[str, Depends(require_user_id)]
DatabaseDep = Annotated[Database, Depends(get_database)]
STTDep = Annotated[BaseSTT, Depends(get_stt)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
