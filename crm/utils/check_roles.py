from fastapi import Depends
from crm.core.exceptions import AuthorizationError
from crm.utils.get_user import get_current_user
from crm.models.users.user_models import User


def require_role(roles: list[str]):
    async def role_checker(user: User = Depends(get_current_user)):
        if user.role.lower() not in [r.lower() for r in roles]:
            raise AuthorizationError()
        return user
    return role_checker
