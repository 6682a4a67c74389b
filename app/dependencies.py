"""Shared router dependencies and error translation."""
from fastapi import Depends, HTTPException, status

from app.errors import CatalogError, NotAuthenticatedError, SlugConflictError
from app.gateway import Gateway, get_gateway
from app.models.auth import AuthUser
from app.services.auth_service import AuthService
from app.services.catalog_service import CatalogService
from app.services.image_service import ImageService
from app.utils.session import SessionStore, get_session_store


def get_auth_service(
    gw: Gateway = Depends(get_gateway),
    store: SessionStore = Depends(get_session_store),
) -> AuthService:
    """Dependency to get the auth service bound to the session store."""
    return AuthService(gw.auth, store)


def get_catalog_service(
    gw: Gateway = Depends(get_gateway),
    auth: AuthService = Depends(get_auth_service),
) -> CatalogService:
    """Dependency to get the catalog service."""
    return CatalogService(gw.catalog, auth)


def get_image_service(
    gw: Gateway = Depends(get_gateway),
    auth: AuthService = Depends(get_auth_service),
) -> ImageService:
    """Dependency to get the image service."""
    return ImageService(gw.images, auth)


def get_current_user(auth: AuthService = Depends(get_auth_service)) -> AuthUser:
    """
    Dependency to require a logged-in operator.

    Raises:
        HTTPException: If there is no session (401)
    """
    user = auth.current_user()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


def backend_error(e: Exception) -> HTTPException:
    """
    Translate a service exception into an HTTP error for the console UI.

    Slug conflicts get 409 with a message distinct from generic failures.
    """
    if isinstance(e, NotAuthenticatedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    if isinstance(e, SlugConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, CatalogError):
        if e.status is None or e.status >= 500:
            return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
        return HTTPException(status_code=e.status, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
