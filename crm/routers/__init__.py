# crm/routers/__init__.py

from .auth.auth_router import router as auth_router

from .users.user_router import router as user_router

from .quotations.quotation_router import router as quotation_router

from .support.notification_router import router as notification_router
from .support.activity_router import router as activity_router


__all__ = [
"auth_router",

"user_router",

"quotation_router",

"notification_router",
"activity_router",
]
