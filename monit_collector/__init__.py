"""
Monit Collector

Parses Monit push notifications into typed objects.

LAYER FLOW:
===========
1. Ingestion: raw XML bytes -> generic Document
2. Collector: Document -> hand-off queue -> consumer
3. Projection: GenericService -> kind-specific view, on demand
"""

from .contracts import (
    Document,
    Error,
    ErrorCode,
    Event,
    GenericService,
    Result,
    ServiceGroup,
    ServiceKind,
    Timestamp,
)
from .ingestion import Decoder, DecodeError, Parser, XmlDecoder, parse_bytes
from .projection import (
    PROJECTORS,
    project,
    project_any,
    project_as_directory,
    project_as_fifo,
    project_as_file,
    project_as_filesystem,
    project_as_net,
    project_as_process,
    project_as_program,
    project_as_system,
)
from .collector import CollectResponse, Collector, CollectorConfig, HandoffQueue

__version__ = "0.1.0"
