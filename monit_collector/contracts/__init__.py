"""
Contracts Module

Immutable data contracts shared by the decoder, projection and collector.
"""

from .base import Error, ErrorCode, Result, Timestamp
from .document import (
    Credentials,
    Document,
    Event,
    FilesystemSize,
    GenericService,
    Httpd,
    Link,
    Load,
    Memory,
    NetLinkCount,
    Platform,
    ProcessCpu,
    Server,
    ServiceGroup,
    ServiceKind,
    ServiceProgram,
    ServiceSystem,
    Swap,
    SystemCpu,
)
from .views import (
    DirectoryView,
    FifoView,
    FileView,
    FilesystemView,
    NetView,
    ProcessView,
    ProgramView,
    ServiceView,
    SystemView,
)
