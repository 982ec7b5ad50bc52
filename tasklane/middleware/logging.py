import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request. ``user_id`` is filled in by ``get_current_user``
    once the bearer token resolves, so anonymous and rejected requests log
    ``user=-``.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            user_id = getattr(request.state, "user_id", None)
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} user={user_id or '-'} - ERROR",
                extra={
                    "request_id": request_id,
                    "user_id": user_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": _elapsed_ms(started),
                    "error": str(exc),
                },
            )
            raise

        user_id = getattr(request.state, "user_id", None)
        duration_ms = _elapsed_ms(started)
        logger.log(
            logging.WARNING if response.status_code >= 400 else logging.INFO,
            f"[{request_id}] {request.method} {request.url.path} user={user_id or '-'} "
            f"- {response.status_code} ({duration_ms}ms)",
            extra={
                "request_id": request_id,
                "user_id": user_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
