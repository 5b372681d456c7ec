"""ASGI front door of the resumable upload engine."""

import logging
from typing import Optional

from starlette.responses import JSONResponse

from uploads_api.adapters.upload_engine import Message, Receive, Scope, Send, UploadEngine

logger = logging.getLogger(__name__)


class UploadGateway:
    """
    Hand every request on the upload path to the engine.

    If the engine returns without starting a response the request was not a
    protocol operation it recognizes, and a 404 is sent. If it fails before
    starting a response a 500 is sent; after that point the failure can only
    be logged.
    """

    def __init__(self, engine: Optional[UploadEngine]):
        self.engine = engine

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            if self.engine is not None:
                await self.engine(scope, receive, send)
            return

        logger.info(
            "Upload request: %s %s%s",
            scope["method"],
            scope.get("root_path", ""),
            scope["path"],
        )
        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            if self.engine is not None:
                await self.engine(scope, receive, tracking_send)
        except Exception as e:
            logger.exception("Upload engine error")
            if response_started:
                return
            response = JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "details": str(e)},
            )
            await response(scope, receive, send)
            return

        if not response_started:
            logger.warning("Upload engine did not handle %s %s, sending 404", scope["method"], scope["path"])
            await JSONResponse(status_code=404, content={"error": "Not found"})(scope, receive, send)
