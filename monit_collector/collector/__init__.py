"""
Collector Layer

RESPONSIBILITY: accept notifications over HTTP, hand Documents to a consumer
ALLOWED INPUTS: raw request bodies
OUTPUTS: Documents on a HandoffQueue
"""

from .config import CollectorConfig
from .handoff import HandoffQueue
from .service import CollectResponse, Collector
