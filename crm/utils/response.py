# crm/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any
from pydantic import BaseModel

from crm.constants.error_codes import ErrorCode

T = TypeVar("T")


# -------------------------
# SUCCESS ENVELOPE
# -------------------------
def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {"success": True, "message": message, "data": data}


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


# -------------------------
# ERROR ENVELOPE
# -------------------------
def error_response(message: str, error_code: ErrorCode | str, details: Any = None) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": details,
    }


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: str
    details: Optional[Any] = None
