"""Auth router - API endpoints for the operator session."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_auth_service, get_current_user
from app.errors import AuthError
from app.models.auth import AuthUser, LoginRequest
from app.services.auth_service import AuthService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthUser)
async def login(
    login_req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Login against the auth backend and keep the session.

    Args:
        login_req: Login credentials
        service: Auth service

    Returns:
        Logged-in user

    Raises:
        HTTPException: If credentials are invalid (401)
    """
    try:
        session = await service.login(
            login=login_req.login,
            password=login_req.password,
        )
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    if session.user is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Auth service returned no user",
        )
    return session.user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(service: AuthService = Depends(get_auth_service)):
    """Forget the stored session."""
    service.logout()


@router.get("/me", response_model=AuthUser)
async def get_me(user: AuthUser = Depends(get_current_user)):
    """
    Get the logged-in user, restoring a stored session after restart.

    Raises:
        HTTPException: If there is no session (401)
    """
    return user
