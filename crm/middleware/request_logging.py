import time
import uuid

from fastapi import Request

from crm.utils.logger import get_logger

logger = get_logger("crm.access")

REQUEST_ID_HEADER = "X-Request-ID"


def _caller(request: Request) -> str:
    # populated by get_current_user once the bearer token checks out
    user = getattr(request.state, "user", None)
    if user is None:
        return "-"
    return f"{user.role}:{user.id}"


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    # stays 500 when the handler raises; the last-resort handler renders the body
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        log = logger.warning if status_code >= 500 else logger.info
        log(
            "",
            extra={
                "request_id": request_id,
                "client_addr": request.client.host if request.client else "unknown",
                "caller": _caller(request),
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "process_time_ms": elapsed_ms,
            },
        )
