"""
Session endpoints: login, register, logout and the current user.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from stayfront.api.deps import get_api_client, get_session, set_session_cookie
from stayfront.core.errors import StayfrontError, Unauthorized
from stayfront.schemas.pages import SessionPage
from stayfront.schemas.user import LoginRequest, RegisterRequest
from stayfront.services import auth_service
from stayfront.services.api_client import ApiClient
from stayfront.services.session import Session

router = APIRouter(tags=["Authentication"])


@router.get("/login", response_model=SessionPage)
async def login_page(
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """Where unauthenticated visitors are sent."""
    user = await auth_service.get_current_user(client, session)
    if user:
        return SessionPage(user=user, message="You are already logged in")
    return SessionPage(message="Please log in to continue")


@router.post("/login", response_model=SessionPage)
async def login(
    credentials: LoginRequest,
    response: Response,
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    try:
        user = await auth_service.login(client, session, credentials)
    except StayfrontError as e:
        return JSONResponse({"error": e.message}, status_code=status.HTTP_400_BAD_REQUEST)
    set_session_cookie(response, session)
    return SessionPage(user=user)


@router.post("/register", response_model=SessionPage, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    response: Response,
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    try:
        user = await auth_service.register(client, session, user_data)
    except StayfrontError as e:
        return JSONResponse({"error": e.message}, status_code=status.HTTP_400_BAD_REQUEST)
    set_session_cookie(response, session)
    return SessionPage(user=user)


@router.post("/logout")
async def logout(
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """Log out and go back to the home page."""
    try:
        await auth_service.logout(client, session)
    except Unauthorized:
        # Token was already rejected and has been cleared
        pass
    except StayfrontError as e:
        return JSONResponse({"error": e.message}, status_code=status.HTTP_400_BAD_REQUEST)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/me", response_model=SessionPage)
async def me(
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    return SessionPage(user=await auth_service.get_current_user(client, session))
