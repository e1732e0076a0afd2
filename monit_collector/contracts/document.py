"""
Document Contracts

Generic shapes for one Monit notification as it arrives on the wire.

Every model field declares WHERE it lives in the XML (child element path or
attribute) and HOW its text is converted. The binder in
monit_collector.ingestion.binding walks these declarations; this module
never touches markup itself.

WHY ONE GENERIC SERVICE SHAPE:
==============================
The agent emits every monitored entity as <services><service>, whatever its
kind. The kind is only known from the `type` discriminant inside the element,
so decoding has to use one shape carrying every kind's fields. Consumers turn
a GenericService into a typed view through monit_collector.projection.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional, Tuple

from .base import Timestamp, epoch_microseconds, epoch_seconds


# =============================================================================
# WIRE LOCATIONS
# =============================================================================

@dataclass(frozen=True)
class WireLocation:
    """Source location of one model field inside its parent element."""
    path: str
    convert: Callable = str
    attr: bool = False
    element_fallback: bool = False  # attribute missing -> child element of same name
    text_fallback: bool = False     # child missing -> parent's own character data
    nested: Optional[type] = None
    many: bool = False
    present: bool = False           # True when the child element exists, whatever its content


def wire(
    path: str,
    convert: Callable = str,
    *,
    attr: bool = False,
    element_fallback: bool = False,
    text_fallback: bool = False,
    nested: Optional[type] = None,
    many: bool = False,
    present: bool = False
):
    """Declare a dataclass field bound to an XML location, zero-valued by default."""
    location = WireLocation(
        path=path,
        convert=convert,
        attr=attr,
        element_fallback=element_fallback,
        text_fallback=text_fallback,
        nested=nested,
        many=many,
        present=present
    )
    metadata = {'wire': location}
    if many:
        return field(default_factory=tuple, metadata=metadata)
    if nested is not None:
        return field(default_factory=nested, metadata=metadata)
    if present:
        return field(default=False, metadata=metadata)
    return field(default=convert(), metadata=metadata)


# =============================================================================
# SERVICE KINDS
# =============================================================================

class ServiceKind(IntEnum):
    """
    Monit service type identifiers.

    4 is unused by the agent and must stay unused.
    """
    FILESYSTEM = 0
    DIRECTORY = 1
    FILE = 2
    PROCESS = 3
    SYSTEM = 5
    FIFO = 6
    PROGRAM = 7
    NET = 8

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @staticmethod
    def describe(kind: int) -> str:
        """Human readable kind name, tolerant of undeclared discriminants."""
        try:
            return ServiceKind(kind).label
        except ValueError:
            return f"Unknown({kind})"


# =============================================================================
# SERVER / PLATFORM
# =============================================================================

@dataclass(frozen=True)
class Httpd:
    """monit>server>httpd"""
    address: str = wire('address')
    port: int = wire('port', int)
    ssl: int = wire('ssl', int)


@dataclass(frozen=True)
class Credentials:
    """monit>server>credentials"""
    username: str = wire('username')
    password: str = wire('password')


@dataclass(frozen=True)
class Server:
    """Agent self-description."""
    uptime: int = wire('uptime', int)
    poll: int = wire('poll', int)
    start_delay: int = wire('startdelay', int)
    local_hostname: str = wire('localhostname')
    control_file: str = wire('controlfile')
    httpd: Httpd = wire('httpd', nested=Httpd)
    credentials: Credentials = wire('credentials', nested=Credentials)


@dataclass(frozen=True)
class Platform:
    """Host platform as reported by the agent. Pass-through strings."""
    name: str = wire('name')
    release: str = wire('release')
    version: str = wire('version')
    machine: str = wire('machine')
    cpu: str = wire('cpu')
    memory: str = wire('memory')
    swap: str = wire('swap')


# =============================================================================
# NESTED SERVICE BLOCKS (shared by generic and kind-specific shapes)
# =============================================================================

@dataclass(frozen=True)
class FilesystemSize:
    percent: float = wire('percent', float)
    usage: float = wire('usage', float)
    total: float = wire('total', float)


@dataclass(frozen=True)
class Memory:
    percent: float = wire('percent', float)
    percent_total: float = wire('percenttotal', float)
    kilobyte: int = wire('kilobyte', int)
    kilobyte_total: int = wire('kilobytetotal', int)


@dataclass(frozen=True)
class ProcessCpu:
    percent: float = wire('percent', float)
    percent_total: float = wire('percenttotal', float)


@dataclass(frozen=True)
class SystemCpu:
    user: float = wire('user', float)
    system: float = wire('system', float)
    wait: float = wire('wait', float)


@dataclass(frozen=True)
class Load:
    avg01: float = wire('avg01', float)
    avg05: float = wire('avg05', float)
    avg15: float = wire('avg15', float)


@dataclass(frozen=True)
class Swap:
    percent: float = wire('percent', float)
    kilobyte: int = wire('kilobyte', int)


@dataclass(frozen=True)
class NetLinkCount:
    now: int = wire('now', int)
    total: int = wire('total', int)


@dataclass(frozen=True)
class Link:
    """monit>services>service>link"""
    state: int = wire('state', int)
    speed: int = wire('speed', int)
    duplex: int = wire('duplex', int)
    download_packets: NetLinkCount = wire('download/packets', nested=NetLinkCount)
    download_bytes: NetLinkCount = wire('download/bytes', nested=NetLinkCount)
    download_errors: NetLinkCount = wire('download/errors', nested=NetLinkCount)
    upload_packets: NetLinkCount = wire('upload/packets', nested=NetLinkCount)
    upload_bytes: NetLinkCount = wire('upload/bytes', nested=NetLinkCount)
    upload_errors: NetLinkCount = wire('upload/errors', nested=NetLinkCount)


@dataclass(frozen=True)
class ServiceSystem:
    """monit>services>service>system"""
    cpu: SystemCpu = wire('cpu', nested=SystemCpu)
    memory: Memory = wire('memory', nested=Memory)
    load: Load = wire('load', nested=Load)
    swap: Swap = wire('swap', nested=Swap)


@dataclass(frozen=True)
class ServiceProgram:
    """monit>services>service>program"""
    status: int = wire('status', int)
    started: int = wire('started', int)
    output: str = wire('output')


# =============================================================================
# GENERIC SERVICE (decode-only shape)
# =============================================================================

@dataclass(frozen=True)
class GenericService:
    """
    One monitored entity before kind resolution.

    Carries every kind's payload fields because the decoder cannot pick a
    concrete shape. Read it through a projector, not directly.
    """
    # Common envelope
    name: str = wire('name', attr=True, element_fallback=True)
    kind: int = wire('type', int, attr=True, element_fallback=True)
    collected_sec: int = wire('collected_sec', epoch_seconds)
    collected_usec: int = wire('collected_usec', epoch_microseconds)
    status: int = wire('status', int)
    status_hint: int = wire('status_hint', int)
    monitor: int = wire('monitor', int)
    monitor_mode: int = wire('monitormode', int)
    pending_action: int = wire('pendingaction', int)

    # Filesystem / directory / file / fifo
    mode: str = wire('mode')
    uid: int = wire('uid', int)
    gid: int = wire('gid', int)
    flags: int = wire('flags', int)
    block: FilesystemSize = wire('block', nested=FilesystemSize)
    inode: FilesystemSize = wire('inode', nested=FilesystemSize)
    timestamp: int = wire('timestamp', epoch_seconds)
    size: int = wire('size', int)

    # Process
    pid: int = wire('pid', int)
    ppid: int = wire('ppid', int)
    euid: int = wire('euid', int)
    uptime: int = wire('uptime', int)
    children: int = wire('children', int)
    memory: Memory = wire('memory', nested=Memory)
    cpu: ProcessCpu = wire('cpu', nested=ProcessCpu)

    # System / program / net
    system: ServiceSystem = wire('system', nested=ServiceSystem)
    program: ServiceProgram = wire('program', nested=ServiceProgram)
    link: Link = wire('link', nested=Link)

    @property
    def service_kind(self) -> Optional[ServiceKind]:
        """Declared kind, or None for a discriminant the agent does not define."""
        try:
            return ServiceKind(self.kind)
        except ValueError:
            return None

    @property
    def collected_at(self) -> Timestamp:
        return Timestamp.from_epoch(self.collected_sec, self.collected_usec)


# =============================================================================
# FLAT RECORDS
# =============================================================================

@dataclass(frozen=True)
class ServiceGroup:
    """One group membership pair. A group with N members appears N times."""
    name: str = wire('name', attr=True)
    service: str = wire('service')


@dataclass(frozen=True)
class Event:
    """Monit event. Relates to services only through the service name."""
    collected_sec: int = wire('collected_sec', epoch_seconds)
    collected_usec: int = wire('collected_usec', epoch_microseconds)
    service: str = wire('service')
    type: int = wire('type', int)
    id: int = wire('id', int)
    state: int = wire('state', int)
    action: int = wire('action', int)
    message: str = wire('message', text_fallback=True)
    token: str = wire('token')

    @property
    def collected_at(self) -> Timestamp:
        return Timestamp.from_epoch(self.collected_sec, self.collected_usec)


# =============================================================================
# DOCUMENT (root)
# =============================================================================

ROOT_TAG = 'monit'


@dataclass(frozen=True)
class Document:
    """One parsed notification. Immutable once decoded."""
    id: str = wire('id', attr=True)
    incarnation: str = wire('incarnation', attr=True)
    version: str = wire('version', attr=True)
    server: Server = wire('server', nested=Server)
    platform: Platform = wire('platform', nested=Platform)
    services: Tuple[GenericService, ...] = wire(
        'services/service', nested=GenericService, many=True
    )
    service_groups: Tuple[ServiceGroup, ...] = wire(
        'servicegroups/servicegroup', nested=ServiceGroup, many=True
    )
    event: Event = wire('event', nested=Event)
    event_reported: bool = wire('event', present=True)

    @property
    def has_event(self) -> bool:
        """True when the notification carried an <event>, even an empty one."""
        return self.event_reported or self.event != Event()

    def services_of(self, kind: ServiceKind) -> Tuple[GenericService, ...]:
        """Services whose discriminant equals `kind`, in document order."""
        return tuple(s for s in self.services if s.kind == kind)

    def group_members(self, group: str) -> Tuple[str, ...]:
        return tuple(g.service for g in self.service_groups if g.name == group)
