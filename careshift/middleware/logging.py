import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("access")

class LoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request, tagged with the matched endpoint name and the ids in the path"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        route = request.scope.get("route")
        endpoint = getattr(route, "name", None) or "unmatched"
        path_ids = " ".join(f"{k}={v}" for k, v in request.scope.get("path_params", {}).items())

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            f"[{request_id}] {request.method} {request.url.path} -> {endpoint}"
            + (f" ({path_ids})" if path_ids else "")
            + f" - Status: {response.status_code} - Time: {process_time:.4f}s"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        return response
