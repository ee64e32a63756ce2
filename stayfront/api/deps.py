"""
FastAPI dependencies: the remote API client and the browser session.
"""

from fastapi import Depends, Request, Response

from stayfront.core.config import get_settings
from stayfront.services.api_client import ApiClient
from stayfront.services.interfaces import TokenStore
from stayfront.services.session import Session
from stayfront.services.store_factory import get_token_store


def get_api_client(request: Request) -> ApiClient:
    return request.app.state.api_client


def set_session_cookie(response: Response, session: Session):
    settings = get_settings()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session.id,
        max_age=settings.SESSION_TTL,
        httponly=True,
        samesite="lax",
    )


async def get_session(
    request: Request,
    response: Response,
    store: TokenStore = Depends(get_token_store),
) -> Session:
    """
    Resolve the session from its cookie, issuing a new cookie for
    first-time visitors.
    """
    session_id = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    session = await Session.load(store, session_id)

    if session.id != session_id:
        set_session_cookie(response, session)
    return session
