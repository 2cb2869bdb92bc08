"""User Routes: register, login, deposit top-up."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id
from bookpost.config import Settings, get_settings
from bookpost.infrastructure.database import get_db
from bookpost.schemas.user import (
    TokenResponse, TopupRequest, TopupResponse,
    UserLogin, UserRegister, UserResponse,
)
from bookpost.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    body: UserRegister,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a new user with a bcrypt-hashed password."""
    user = await AccountService(db, settings).register(body)
    return UserResponse.from_model(user)


@router.post("/login", response_model=TokenResponse)
async def login_user(
    body: UserLogin,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a bearer token."""
    token = await AccountService(db, settings).login(body)
    return TokenResponse(token=token)


@router.post("/topup", response_model=TopupResponse)
async def topup(
    body: TopupRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Add an amount to the caller's deposit."""
    deposit = await AccountService(db, settings).topup(user_id, body.amount)
    return TopupResponse(
        message=f"Deposit added. Current deposit amount: {deposit}",
        deposit=deposit,
    )
