from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faris.api.deps import require_student_or_admin
from faris.models.base import get_db
from faris.models.user import User
from faris.schemas import auth as auth_schema
from faris.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=auth_schema.UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: auth_schema.RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Student registration API (account starts pending)"""
    return await auth_service.register(db, request)


@router.post("/login", response_model=auth_schema.TokenResponse)
async def login(
    request: auth_schema.LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Login API"""
    return await auth_service.login(db, request)


@router.get("/me", response_model=auth_schema.UserResponse)
async def get_me(user: User = Depends(require_student_or_admin)):
    return auth_schema.UserResponse.model_validate(user)


@router.put("/me", response_model=auth_schema.UserResponse)
async def update_me(
    request: auth_schema.ProfileUpdateRequest,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Profile update API (name and phone)"""
    return await auth_service.update_profile(db, user, request)


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    request: auth_schema.PasswordChangeRequest,
    user: User = Depends(require_student_or_admin),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.change_password(db, user, request)
