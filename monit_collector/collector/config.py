"""
Collector Configuration

Frozen configuration for the collector and its HTTP surface.
Values come from keyword arguments or MONIT_COLLECTOR_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os


ENV_PREFIX = "MONIT_COLLECTOR_"


@dataclass(frozen=True)
class CollectorConfig:
    """
    Configuration for one collector.

    WHY FROZEN:
    Config should not change while requests are in flight.
    Changes require a new collector.

    queue_capacity must be at least 1: a stdlib queue with maxsize 0 is
    unbounded, the opposite of a hand-off. Capacity 1 is the closest to an
    unbuffered channel and the default.
    """
    queue_capacity: int = 1
    publish_timeout_seconds: float = 10.0
    route_path: str = "/collector"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    def __post_init__(self):
        if self.queue_capacity < 1:
            raise ValueError("queue_capacity must be at least 1")
        if self.publish_timeout_seconds <= 0:
            raise ValueError("publish_timeout_seconds must be positive")
        if not self.route_path.startswith("/"):
            raise ValueError("route_path must start with '/'")
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535")

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> CollectorConfig:
        """Build config from MONIT_COLLECTOR_* variables, defaults elsewhere."""
        env = os.environ if environ is None else environ
        defaults = CollectorConfig()

        def get(name: str, default):
            return env.get(ENV_PREFIX + name, default)

        return CollectorConfig(
            queue_capacity=int(get("QUEUE_CAPACITY", defaults.queue_capacity)),
            publish_timeout_seconds=float(
                get("PUBLISH_TIMEOUT", defaults.publish_timeout_seconds)
            ),
            route_path=get("ROUTE", defaults.route_path),
            host=get("HOST", defaults.host),
            port=int(get("PORT", defaults.port)),
            log_level=get("LOG_LEVEL", defaults.log_level).upper(),
        )
