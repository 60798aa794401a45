import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from medisco.core.logger import logger


class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        logger.info(
            '%s %s -> %s (%.4fs)',
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - start_time,
        )

        return response
