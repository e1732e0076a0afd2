"""
Ingestion Layer

RESPONSIBILITY: bytes -> generic Document
OUTPUTS: Result carrying a Document or a decode Error

WHAT THIS LAYER MUST NOT DO:
============================
- Resolve service kinds (that's projection's job)
- Publish documents anywhere (that's the collector's job)
"""

from .decoder import DecodeError, Decoder, XmlDecoder
from .binding import bind
from .parser import Parser, parse_bytes
