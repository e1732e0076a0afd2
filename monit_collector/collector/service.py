"""
Collector

Implementation of the M/Monit `/collector` endpoint: parse each request body
and hand the Document to the consumer.

DESIGN:
=======
1. One worker thread per request; the event loop never blocks on decode
   or on a full queue
2. The collector is a plain value: its queue is injected and the caller
   decides where its endpoint is mounted
3. A request body is owned by its handler and released on every exit path
"""

import io
import logging
from typing import Optional

from fastapi import HTTPException, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from ..contracts.base import ErrorCode, Result
from ..ingestion.decoder import Decoder, XmlDecoder
from ..ingestion.parser import Parser
from .config import CollectorConfig
from .handoff import HandoffQueue

logger = logging.getLogger(__name__)


HTTP_STATUS = {
    ErrorCode.EMPTY_PAYLOAD: 400,
    ErrorCode.MALFORMED_PAYLOAD: 400,
    ErrorCode.UNRESOLVED_CHARSET: 400,
    ErrorCode.TRANSPORT_FAILURE: 400,
    ErrorCode.PUBLISH_TIMEOUT: 503,
}


class CollectResponse(BaseModel):
    """Acknowledgement for an accepted notification."""
    status: str = "accepted"
    id: str
    services: int


class Collector:
    """Parses notifications and publishes them onto a hand-off queue."""

    def __init__(
        self,
        handoff: HandoffQueue,
        config: Optional[CollectorConfig] = None,
        decoder: Optional[Decoder] = None
    ):
        self._handoff = handoff
        self._config = config or CollectorConfig()
        self._decoder = decoder or XmlDecoder()

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def handoff(self) -> HandoffQueue:
        return self._handoff

    def handle(self, body: bytes) -> Result:
        """
        Parse one request body and publish the Document.

        Blocks until the consumer accepts or the publish timeout expires.
        Returns the published Document, or the decode/publish Error.
        """
        with io.BytesIO(body) as stream:
            parsed = Parser(stream, self._decoder).parse()

        if parsed.is_failure:
            logger.warning("Rejected notification: %s", parsed.error.message)
            return parsed

        document = parsed.value
        published = self._handoff.publish(
            document, timeout=self._config.publish_timeout_seconds
        )
        if published.is_success:
            logger.info(
                "Accepted notification id=%s services=%d event=%s",
                document.id, len(document.services), document.has_event
            )
        return published

    async def endpoint(self, request: Request) -> CollectResponse:
        """Request handler; mount with app.add_api_route(path, collector.endpoint)."""
        try:
            body = await request.body()
        except ClientDisconnect:
            logger.warning("Client disconnected while sending notification")
            raise HTTPException(
                status_code=HTTP_STATUS[ErrorCode.TRANSPORT_FAILURE],
                detail="Request body incomplete"
            )

        result = await run_in_threadpool(self.handle, body)
        if result.is_failure:
            raise HTTPException(
                status_code=HTTP_STATUS.get(result.error.code, 500),
                detail=result.error.message
            )

        document = result.value
        return CollectResponse(id=document.id, services=len(document.services))
