"""
Authentication service: login, registration, logout and "who am I".
"""

from typing import Optional

from stayfront.core.errors import StayfrontError
from stayfront.core.logging import get_logger
from stayfront.core.metrics import record_session_event
from stayfront.schemas.user import AuthResponse, LoginRequest, RegisterRequest, User
from stayfront.services.api_client import ApiClient, parse
from stayfront.services.session import Session

logger = get_logger(__name__)


async def login(client: ApiClient, session: Session, credentials: LoginRequest) -> User:
    """
    Log in and remember the returned token for this session.
    Raises HttpError with the server's message on bad credentials.
    """
    data = await client.request(
        session,
        "/auth/login",
        method="POST",
        body=credentials,
        error_message="Invalid email or password",
        raise_unauthorized=False,
    )
    auth = parse(AuthResponse, data)
    if auth.token:
        await session.rotate()
        await session.set_token(auth.token)

    record_session_event("login")
    logger.info("user_logged_in", user_id=auth.user.id, session_id=session.id)
    return auth.user


async def register(client: ApiClient, session: Session, user_data: RegisterRequest) -> User:
    """Create an account; the API logs the new user in when it returns a token."""
    data = await client.request(
        session,
        "/auth/register",
        method="POST",
        body=user_data,
        error_message="Registration failed",
        raise_unauthorized=False,
    )
    auth = parse(AuthResponse, data)
    if auth.token:
        await session.rotate()
        await session.set_token(auth.token)

    record_session_event("register")
    logger.info("user_registered", user_id=auth.user.id, email=auth.user.email)
    return auth.user


async def logout(client: ApiClient, session: Session) -> None:
    """
    End the session on the server, then forget the token.
    The token is only kept when the server refuses the logout.
    """
    await client.request(
        session,
        "/auth/logout",
        method="POST",
        error_message="Logout failed",
    )
    await session.clear_token()

    record_session_event("logout")
    logger.info("user_logged_out", session_id=session.id)


async def get_current_user(client: ApiClient, session: Session) -> Optional[User]:
    """The logged-in user, or None. Never raises."""
    if not session.token:
        return None

    try:
        data = await client.request(session, "/auth/me")
        return parse(User, data)
    except StayfrontError as e:
        logger.info("current_user_unavailable", reason=type(e).__name__)
        return None
