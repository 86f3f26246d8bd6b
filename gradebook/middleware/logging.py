import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Callable, List

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from gradebook.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every statement or connection at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "alembic", "aiosqlite", "httpx")


def setup_logging() -> logging.Logger:
    """Configure root logging from settings and return the application logger."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        os.makedirs(Path(settings.LOG_FILE).parent, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("gradebook")
    logger.setLevel(log_level)
    return logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line when a request starts and one when it finishes.

    The request id is taken from an incoming ``X-Request-ID`` header when the
    caller supplies one, otherwise generated. It is stored on
    ``request.state.request_id`` and echoed back together with the handler
    latency in ``X-Latency-Ms``.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = logging.getLogger("gradebook.request")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        client = request.client.host if request.client else "unknown"
        start = time.perf_counter()

        self.logger.info(
            f"Request started: {request.method} {request.url.path} "
            f"[client: {client}] [request_id: {request_id}]"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"[error: {e}] [request_id: {request_id}]",
                exc_info=True,
            )
            raise

        latency_ms = int((time.perf_counter() - start) * 1000)
        self.logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"[status: {response.status_code}] [duration: {latency_ms}ms] "
            f"[request_id: {request_id}]"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Latency-Ms"] = str(latency_ms)
        return response


def add_logging_middleware(app: FastAPI):
    app.add_middleware(RequestLoggingMiddleware)
