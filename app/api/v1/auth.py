"""Authentication endpoints: customer registration, login and profile."""

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, DbSession
from app.core.config import settings
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.user import UserRead
from app.services.auth import AuthService, EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Customer registration",
    description="Create a customer account",
)
async def register(
    request: RegisterRequest,
    session: DbSession,
) -> UserRead:
    """Register a new customer.

    Raises:
        HTTPException: 409 if the email is already registered
    """
    auth_service = AuthService(session)

    try:
        user = await auth_service.register_customer(
            name=request.name,
            email=request.email,
            password=request.password,
            phone=request.phone,
        )
    except EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login",
    description="Authenticate with email and password",
)
async def login(
    credentials: LoginRequest,
    session: DbSession,
) -> TokenResponse:
    """Authenticate a user and return a JWT token.

    Raises:
        HTTPException: If credentials are invalid
    """
    auth_service = AuthService(session)
    user = await auth_service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )

    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return TokenResponse(
        access_token=auth_service.create_token(user),
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current user",
)
async def get_me(user: CurrentUser) -> UserRead:
    """Return the authenticated user's profile."""
    return UserRead.model_validate(user)
