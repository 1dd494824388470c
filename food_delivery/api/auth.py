"""Authentication and profile API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.config import settings
from food_delivery.database import get_db
from food_delivery.exceptions import UserNotFound
from food_delivery.models.user import User
from food_delivery.schemas.auth import (
    LoginRequest,
    PasswordChange,
    RefreshRequest,
    RegisterResponse,
    Token,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from food_delivery.schemas.common import MessageResponse
from food_delivery.security import ACCESS_TOKEN, decode_token
from food_delivery.services import accounts
from food_delivery.services.accounts import TokenPair

router = APIRouter()

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _token_response(tokens: TokenPair) -> Token:
    return Token(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
        user_id = payload.get("sub")
        token_type = payload.get("type")

        if user_id is None or token_type != ACCESS_TOKEN:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    try:
        return await accounts.get_active_user(db, int(user_id))
    except UserNotFound:
        raise credentials_exception


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and sign it in"""
    user = await accounts.register_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        phone=user_data.phone,
    )
    tokens = await accounts.issue_tokens(db, user)

    return RegisterResponse(
        **_token_response(tokens).model_dump(),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return tokens"""
    tokens = await accounts.authenticate(db, credentials.email, credentials.password)
    return _token_response(tokens)


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Refresh access token using refresh token"""
    tokens = await accounts.refresh_tokens(db, request.refresh_token)
    return _token_response(tokens)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Logout user by invalidating refresh token"""
    await accounts.logout(db, current_user)
    return MessageResponse(message="Successfully logged out")


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
):
    """Get current user information"""
    return current_user


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    profile_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update name or phone"""
    return await accounts.update_profile(
        db, current_user, profile_data.model_dump(exclude_unset=True, exclude_none=True)
    )


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change password; existing refresh tokens stop working"""
    await accounts.change_password(
        db, current_user, password_data.current_password, password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.delete("/account", response_model=MessageResponse)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Deactivate the account"""
    await accounts.deactivate_account(db, current_user)
    return MessageResponse(message="Account deactivated successfully")
