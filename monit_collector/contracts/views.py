"""
Kind-specific Service Views

A view is the validated interpretation of one GenericService. It carries the
common envelope plus ONLY the fields meaningful to its kind, with the split
collection timestamp materialized as one wall-clock value.

Views are produced exclusively by monit_collector.projection.
"""

from __future__ import annotations
from dataclasses import dataclass

from .base import Timestamp
from .document import (
    FilesystemSize,
    Load,
    Memory,
    NetLinkCount,
    ProcessCpu,
    ServiceKind,
    Swap,
    SystemCpu,
)


@dataclass(frozen=True)
class ServiceView:
    """Common envelope shared by every kind-specific view."""
    name: str
    kind: ServiceKind
    time: Timestamp
    status: int
    status_hint: int
    monitor: int
    monitor_mode: int
    pending_action: int


@dataclass(frozen=True)
class FilesystemView(ServiceView):
    mode: str
    uid: int
    gid: int
    flags: int
    block: FilesystemSize
    inode: FilesystemSize


@dataclass(frozen=True)
class DirectoryView(ServiceView):
    mode: str
    uid: int
    gid: int
    timestamp: Timestamp


@dataclass(frozen=True)
class FileView(ServiceView):
    mode: str
    uid: int
    gid: int
    timestamp: Timestamp
    size: int


@dataclass(frozen=True)
class ProcessView(ServiceView):
    pid: int
    ppid: int
    euid: int
    gid: int
    uptime: int
    children: int
    memory: Memory
    cpu: ProcessCpu


@dataclass(frozen=True)
class SystemView(ServiceView):
    cpu: SystemCpu
    memory: Memory
    load: Load
    swap: Swap


@dataclass(frozen=True)
class FifoView(ServiceView):
    mode: str
    uid: int
    gid: int
    timestamp: Timestamp


@dataclass(frozen=True)
class ProgramView(ServiceView):
    program_status: int  # exit status of the last run, not the service status
    started: int
    output: str


@dataclass(frozen=True)
class NetView(ServiceView):
    state: int
    speed: int
    duplex: int
    download_packets: NetLinkCount
    download_bytes: NetLinkCount
    download_errors: NetLinkCount
    upload_packets: NetLinkCount
    upload_bytes: NetLinkCount
    upload_errors: NetLinkCount
