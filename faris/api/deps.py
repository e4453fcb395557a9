from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from faris.core.security import decode_access_token
from faris.crud import user as user_crud
from faris.models.base import get_db
from faris.models.user import ROLE_ADMIN, User
from faris.services.access_service import enforce, resolve_access

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Signed-in user, re-read from the database on every request"""
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return await user_crud.get_user_by_id(db, user_id)


async def require_student_or_admin(user: User | None = Depends(get_current_user)) -> User:
    return enforce(resolve_access(user))


async def require_admin(user: User | None = Depends(get_current_user)) -> User:
    return enforce(resolve_access(user, required_role=ROLE_ADMIN))
