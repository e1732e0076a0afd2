"""
Service Projection

Validated second pass turning a GenericService into its kind-specific view.

WHY A SECOND PASS:
==================
The wire format reuses <service> for every kind, so the decoder cannot
choose a concrete shape. Each projector checks the discriminant, then copies
exactly the fields its view declares. Mappings are written out per kind so a
view can never silently pick up a field that is irrelevant to it.

GUARANTEES:
===========
1. Mismatched kind -> Result.failure(KIND_MISMATCH) naming both kinds, no view
2. Matched kind -> every view field equals the generic field it came from
3. `time` is always collected_sec + collected_usec / 1e6
4. Pure: the input is never modified, repeated calls give equal views
"""

from __future__ import annotations
from typing import Callable, Dict
import logging

from ..contracts.base import Error, ErrorCode, Result, Timestamp
from ..contracts.document import GenericService, ServiceKind
from ..contracts.views import (
    DirectoryView,
    FifoView,
    FileView,
    FilesystemView,
    NetView,
    ProcessView,
    ProgramView,
    SystemView,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SHARED FIELD GROUPS
# =============================================================================

def _envelope(service: GenericService, kind: ServiceKind) -> dict:
    """Common envelope and computed time, identical for every kind."""
    return dict(
        name=service.name,
        kind=kind,
        time=Timestamp.from_epoch(service.collected_sec, service.collected_usec),
        status=service.status,
        status_hint=service.status_hint,
        monitor=service.monitor,
        monitor_mode=service.monitor_mode,
        pending_action=service.pending_action,
    )


def _mismatch(service: GenericService, expected: ServiceKind) -> Result:
    actual = ServiceKind.describe(service.kind)
    error = Error.create(
        ErrorCode.KIND_MISMATCH,
        f"Service '{service.name}' is {actual}, not {expected.label}",
        service=service.name,
        expected=expected.label,
        actual=actual,
    )
    logger.debug(error.message)
    return Result.failure(error)


# =============================================================================
# PROJECTORS (one per kind)
# =============================================================================

def project_as_filesystem(service: GenericService) -> Result:
    if service.kind != ServiceKind.FILESYSTEM:
        return _mismatch(service, ServiceKind.FILESYSTEM)
    return Result.success(FilesystemView(
        **_envelope(service, ServiceKind.FILESYSTEM),
        mode=service.mode,
        uid=service.uid,
        gid=service.gid,
        flags=service.flags,
        block=service.block,
        inode=service.inode,
    ))


def project_as_directory(service: GenericService) -> Result:
    if service.kind != ServiceKind.DIRECTORY:
        return _mismatch(service, ServiceKind.DIRECTORY)
    return Result.success(DirectoryView(
        **_envelope(service, ServiceKind.DIRECTORY),
        mode=service.mode,
        uid=service.uid,
        gid=service.gid,
        timestamp=Timestamp.from_epoch(service.timestamp),
    ))


def project_as_file(service: GenericService) -> Result:
    if service.kind != ServiceKind.FILE:
        return _mismatch(service, ServiceKind.FILE)
    return Result.success(FileView(
        **_envelope(service, ServiceKind.FILE),
        mode=service.mode,
        uid=service.uid,
        gid=service.gid,
        timestamp=Timestamp.from_epoch(service.timestamp),
        size=service.size,
    ))


def project_as_process(service: GenericService) -> Result:
    if service.kind != ServiceKind.PROCESS:
        return _mismatch(service, ServiceKind.PROCESS)
    return Result.success(ProcessView(
        **_envelope(service, ServiceKind.PROCESS),
        pid=service.pid,
        ppid=service.ppid,
        euid=service.euid,
        gid=service.gid,
        uptime=service.uptime,
        children=service.children,
        memory=service.memory,
        cpu=service.cpu,
    ))


def project_as_system(service: GenericService) -> Result:
    if service.kind != ServiceKind.SYSTEM:
        return _mismatch(service, ServiceKind.SYSTEM)
    system = service.system
    return Result.success(SystemView(
        **_envelope(service, ServiceKind.SYSTEM),
        cpu=system.cpu,
        memory=system.memory,
        load=system.load,
        swap=system.swap,
    ))


def project_as_fifo(service: GenericService) -> Result:
    if service.kind != ServiceKind.FIFO:
        return _mismatch(service, ServiceKind.FIFO)
    return Result.success(FifoView(
        **_envelope(service, ServiceKind.FIFO),
        mode=service.mode,
        uid=service.uid,
        gid=service.gid,
        timestamp=Timestamp.from_epoch(service.timestamp),
    ))


def project_as_program(service: GenericService) -> Result:
    if service.kind != ServiceKind.PROGRAM:
        return _mismatch(service, ServiceKind.PROGRAM)
    program = service.program
    return Result.success(ProgramView(
        **_envelope(service, ServiceKind.PROGRAM),
        program_status=program.status,
        started=program.started,
        output=program.output,
    ))


def project_as_net(service: GenericService) -> Result:
    if service.kind != ServiceKind.NET:
        return _mismatch(service, ServiceKind.NET)
    link = service.link
    return Result.success(NetView(
        **_envelope(service, ServiceKind.NET),
        state=link.state,
        speed=link.speed,
        duplex=link.duplex,
        download_packets=link.download_packets,
        download_bytes=link.download_bytes,
        download_errors=link.download_errors,
        upload_packets=link.upload_packets,
        upload_bytes=link.upload_bytes,
        upload_errors=link.upload_errors,
    ))


# =============================================================================
# DISPATCH
# =============================================================================

PROJECTORS: Dict[ServiceKind, Callable[[GenericService], Result]] = {
    ServiceKind.FILESYSTEM: project_as_filesystem,
    ServiceKind.DIRECTORY: project_as_directory,
    ServiceKind.FILE: project_as_file,
    ServiceKind.PROCESS: project_as_process,
    ServiceKind.SYSTEM: project_as_system,
    ServiceKind.FIFO: project_as_fifo,
    ServiceKind.PROGRAM: project_as_program,
    ServiceKind.NET: project_as_net,
}


def project(service: GenericService, kind: ServiceKind) -> Result:
    """Project `service` as `kind`."""
    return PROJECTORS[kind](service)


def project_any(service: GenericService) -> Result:
    """Project `service` as whatever kind its own discriminant declares."""
    kind = service.service_kind
    if kind is None:
        return Result.failure(Error.create(
            ErrorCode.KIND_MISMATCH,
            f"Service '{service.name}' has undeclared kind {service.kind}",
            service=service.name,
            actual=ServiceKind.describe(service.kind),
        ))
    return project(service, kind)
