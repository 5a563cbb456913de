"""Hardware and OS inventory collection."""

from .models import (
    CpuFacts,
    GpuFacts,
    HostIdentity,
    MemoryFacts,
    MemoryModule,
    OsFacts,
    StorageDevice,
    SystemReport,
    Volume,
)
from .report import collect_report
from .source import CimQueryError, InventorySource, PowerShellCimSource

__all__ = [
    "CimQueryError",
    "CpuFacts",
    "GpuFacts",
    "HostIdentity",
    "InventorySource",
    "MemoryFacts",
    "MemoryModule",
    "OsFacts",
    "PowerShellCimSource",
    "StorageDevice",
    "SystemReport",
    "Volume",
    "collect_report",
]
