import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from faris.core.security import create_access_token, hash_password, verify_password
from faris.crud import user as user_crud
from faris.exceptions import (
    AccountPendingError,
    DuplicateEmailError,
    InvalidCredentialsError,
    ReauthenticationFailedError,
)
from faris.models.user import ROLE_STUDENT, STATUS_PENDING, User
from faris.schemas import auth as auth_schema

logger = logging.getLogger(__name__)


async def register(
    session: AsyncSession,
    request: auth_schema.RegisterRequest,
) -> auth_schema.UserResponse:
    """Create a pending student account"""
    existing = await user_crud.get_user_by_email(session, request.email)
    if existing:
        raise DuplicateEmailError()

    try:
        user = await user_crud.create_user(
            session,
            username=request.username,
            email=request.email,
            phone=request.phone,
            grade=request.grade,
            password_hash=hash_password(request.password),
            role=ROLE_STUDENT,
            status=STATUS_PENDING,
        )
    except IntegrityError:
        await session.rollback()
        raise DuplicateEmailError()

    logger.info(f"Student registered: user_id={user.id}, grade={user.grade}")
    return auth_schema.UserResponse.model_validate(user)


async def login(
    session: AsyncSession,
    request: auth_schema.LoginRequest,
) -> auth_schema.TokenResponse:
    """Check credentials and issue a token

    Admins always get in. Pending students are refused without a token.
    """
    user = await user_crud.get_user_by_email(session, request.email)
    if not user or not verify_password(request.password, user.password_hash):
        raise InvalidCredentialsError()

    if not user.is_admin and user.status == STATUS_PENDING:
        logger.info(f"Login refused for pending account: user_id={user.id}")
        raise AccountPendingError()

    token = create_access_token(user.id)
    return auth_schema.TokenResponse(
        access_token=token,
        user=auth_schema.UserResponse.model_validate(user),
    )


async def update_profile(
    session: AsyncSession,
    user: User,
    request: auth_schema.ProfileUpdateRequest,
) -> auth_schema.UserResponse:
    user = await user_crud.update_user_profile(session, user, request.username, request.phone)
    return auth_schema.UserResponse.model_validate(user)


async def change_password(
    session: AsyncSession,
    user: User,
    request: auth_schema.PasswordChangeRequest,
) -> None:
    """Re-verify the current password, then store the new one"""
    if not verify_password(request.current_password, user.password_hash):
        raise ReauthenticationFailedError()

    await user_crud.update_user_password(session, user, hash_password(request.new_password))
    logger.info(f"Password changed: user_id={user.id}")
