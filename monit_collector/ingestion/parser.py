"""
Notification Parser

Composes a Decoder with the Document contracts.

GUARANTEES:
===========
1. Exactly one outcome per parse() call: a Document or an Error
2. No retries, no partial documents
3. A failed decode is never reported as a zero-valued Document
"""

from __future__ import annotations
from typing import BinaryIO, Optional
import io
import logging

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.document import ROOT_TAG, Document
from .binding import bind
from .decoder import DecodeError, Decoder, XmlDecoder

logger = logging.getLogger(__name__)


class Parser:
    """Decodes Monit notifications from one byte source."""

    def __init__(self, source: BinaryIO, decoder: Optional[Decoder] = None):
        self._source = source
        self.decoder = decoder or XmlDecoder()

    def parse(self) -> Result:
        """Decode the next document from the source."""
        try:
            root = self.decoder.decode(self._source)
            if root.tag != ROOT_TAG:
                raise DecodeError(
                    ErrorCode.MALFORMED_PAYLOAD,
                    f"Unexpected root element <{root.tag}>, expected <{ROOT_TAG}>"
                )
            document = bind(Document, root)
        except DecodeError as e:
            logger.debug("Decode failed: %s", e)
            return Result.failure(Error.create(e.code, str(e)))

        return Result.success(document)


def parse_bytes(data: bytes, decoder: Optional[Decoder] = None) -> Result:
    """Parse a complete in-memory document."""
    with io.BytesIO(data) as source:
        return Parser(source, decoder).parse()
