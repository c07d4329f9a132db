"""Authentication API routes."""
from fastapi import APIRouter, Depends, Response, status

from book_catalog.core.security import get_current_user_id
from book_catalog.dependencies import get_auth_service
from book_catalog.schemas.common import ErrorResponse
from book_catalog.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from book_catalog.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields."},
        409: {"model": ErrorResponse, "description": "Username already exists."},
    },
)
async def register(
    user_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> dict:
    """Register a new user."""
    return await service.register_user(user_data)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials."}},
)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> dict:
    """Login and get access token."""
    return await service.login(credentials)


@router.get("/me", response_model=UserPublic)
async def get_current_user_info(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> dict:
    """Get current user information."""
    return await service.get_user(user_id)


@router.delete("/user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    """Delete the current user's account. Their books are not removed."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
