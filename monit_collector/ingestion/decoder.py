"""
XML Decoder

Responsibility: turn a byte stream into a parsed element tree.
Constraint: NO MODEL KNOWLEDGE. Field locations belong to the contracts.

CHARSET RESOLUTION:
===================
1. Byte order mark, if present
2. `encoding` of the XML declaration, if present
3. UTF-8

The resolved charset is looked up through Python codecs, so any encoding
Python ships (ISO-8859-x, windows-125x, KOI8-R, Shift_JIS, ...) is accepted,
not only the few expat understands natively.
"""

from __future__ import annotations
from typing import BinaryIO
import codecs
import logging
import re
import xml.etree.ElementTree as ET

from ..contracts.base import ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_CHARSET = 'utf-8'

_DECLARED_ENCODING = re.compile(
    rb'^\s*<\?xml[^>]*?encoding\s*=\s*["\']([A-Za-z][A-Za-z0-9._:\-]*)["\']'
)

# Longest marks first: the UTF-32-LE mark starts with the UTF-16-LE one
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)


class DecodeError(Exception):
    """Markup or charset failure. Carries the ErrorCode the caller reports."""

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        super().__init__(message)


class Decoder:
    """
    Abstract decoder capability.

    The parser only knows this interface, so tests and alternative
    backends can substitute their own implementation.
    """

    def decode(self, source: BinaryIO) -> ET.Element:
        """Decode one complete document. Raise DecodeError on failure."""
        raise NotImplementedError


class XmlDecoder(Decoder):
    """ElementTree decoder with charset normalization."""

    def decode(self, source: BinaryIO) -> ET.Element:
        raw = source.read()
        if not raw or not raw.strip():
            raise DecodeError(ErrorCode.EMPTY_PAYLOAD, "Empty document")

        charset = self.resolve_charset(raw)
        text = self._transcode(raw, charset)

        try:
            return ET.fromstring(text)
        except ET.ParseError as e:
            raise DecodeError(ErrorCode.MALFORMED_PAYLOAD, f"Malformed XML: {e}") from e

    def resolve_charset(self, raw: bytes) -> str:
        """Return the Python codec name for the document's bytes."""
        for mark, codec_name in _BYTE_ORDER_MARKS:
            if raw.startswith(mark):
                return codec_name

        match = _DECLARED_ENCODING.match(raw)
        if not match:
            return DEFAULT_CHARSET

        declared = match.group(1).decode('ascii')
        try:
            return codecs.lookup(declared).name
        except LookupError as e:
            raise DecodeError(
                ErrorCode.UNRESOLVED_CHARSET,
                f"Unknown charset: {declared}"
            ) from e

    def _transcode(self, raw: bytes, charset: str) -> str:
        try:
            text = raw.decode(charset)
        except UnicodeDecodeError as e:
            raise DecodeError(
                ErrorCode.UNRESOLVED_CHARSET,
                f"Document is not valid {charset}: {e.reason} at byte {e.start}"
            ) from e

        if charset != DEFAULT_CHARSET:
            logger.debug("Transcoded %d bytes from %s", len(raw), charset)
        return text
