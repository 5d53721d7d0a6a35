"""Request timeout middleware."""

import asyncio

import structlog
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.exceptions import ErrorCode

logger = structlog.get_logger()


class RequestTimeoutMiddleware:
    """Cancel requests that run longer than ``timeout_seconds``.

    Cancellation unwinds the handler, so an open unit of work rolls back.
    A 504 is sent only if the response has not started yet.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "request_timed_out",
                path=scope.get("path"),
                timeout_seconds=self.timeout_seconds,
            )
            if response_started:
                raise
            response = JSONResponse(
                status_code=504,
                content={"error": ErrorCode.INTERNAL.value, "message": "Request timed out"},
            )
            await response(scope, receive, send)
