"""Physical disk detection with a legacy fallback path.

The storage management API (``MSFT_PhysicalDisk``) reports media and bus type
reliably but needs a recent OS build and sufficient privilege. When it cannot
be queried, the legacy ``Win32_DiskDrive`` class is used instead. Both paths
produce identical ``StorageDevice`` records.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from .models import StorageDevice
from .parsers import as_int, as_str, to_gb
from .source import STORAGE_NAMESPACE, CimQueryError, InventorySource

logger = logging.getLogger(__name__)

MEDIA_TYPES = MappingProxyType(
    {
        0: "Unspecified",
        3: "HDD",
        4: "SSD",
        5: "SCM",
    }
)

BUS_TYPES = MappingProxyType(
    {
        0: "Unknown",
        1: "SCSI",
        2: "ATAPI",
        3: "ATA",
        4: "1394",
        5: "SSA",
        6: "Fibre Channel",
        7: "USB",
        8: "RAID",
        9: "iSCSI",
        10: "SAS",
        11: "SATA",
        12: "SD",
        13: "MMC",
        14: "Virtual",
        15: "File Backed Virtual",
        16: "Storage Spaces",
        17: "NVMe",
        18: "SCM",
        19: "UFS",
    }
)


@dataclass(frozen=True)
class PrimaryStorage:
    """Devices enumerated through the storage management API."""

    devices: tuple[StorageDevice, ...]
    source: str = "primary"


@dataclass(frozen=True)
class FallbackStorage:
    """Devices enumerated through the legacy disk drive class."""

    devices: tuple[StorageDevice, ...]
    reason: str = ""
    source: str = "fallback"


StorageResult = Union[PrimaryStorage, FallbackStorage]


def _lookup(value: Any, table: MappingProxyType, default: str = "Unknown") -> str:
    # Get-PhysicalDisk emits labels, Get-CimInstance emits codes
    if isinstance(value, str) and not value.strip().isdigit():
        return value.strip() or default
    return table.get(as_int(value, -1), default)


def classify_primary_media(media_type: Any, bus_type: Any) -> str:
    """Classify media from the storage API's media and bus type fields."""
    media = _lookup(media_type, MEDIA_TYPES, "Unspecified")
    if media != "Unspecified":
        return media
    if _lookup(bus_type, BUS_TYPES) == "NVMe":
        return "SSD"
    return "Unknown"


def classify_legacy_media(media_type: Any, model: Any) -> str:
    """Classify media from legacy fields, which cannot tell HDDs apart reliably."""
    media = as_str(media_type)
    model = as_str(model)
    if "Solid State" in media or "SSD" in model or "NVMe" in model:
        return "SSD"
    return "HDD?"


def _primary_devices(rows: list[dict[str, Any]]) -> tuple[StorageDevice, ...]:
    return tuple(
        StorageDevice(
            name=as_str(row.get("FriendlyName"), "Unknown"),
            size_gb=to_gb(row.get("Size")),
            media_type=classify_primary_media(row.get("MediaType"), row.get("BusType")),
            bus_type=_lookup(row.get("BusType"), BUS_TYPES),
            serial=as_str(row.get("SerialNumber")),
        )
        for row in rows
    )


def _legacy_devices(rows: list[dict[str, Any]]) -> tuple[StorageDevice, ...]:
    return tuple(
        StorageDevice(
            name=as_str(row.get("Model")) or as_str(row.get("Caption"), "Unknown"),
            size_gb=to_gb(row.get("Size")),
            media_type=classify_legacy_media(row.get("MediaType"), row.get("Model")),
            bus_type=as_str(row.get("InterfaceType"), "Unknown"),
            serial=as_str(row.get("SerialNumber")),
        )
        for row in rows
    )


def probe_storage(source: InventorySource) -> StorageResult:
    """Enumerate physical disks, falling back to the legacy class on failure.

    Never raises: if the legacy query fails too, the fallback result is empty.
    """
    try:
        rows = source.query("MSFT_PhysicalDisk", namespace=STORAGE_NAMESPACE)
    except CimQueryError as e:
        logger.debug(f"Storage API unavailable, using legacy disk drives: {e}")
        reason = str(e)
    else:
        return PrimaryStorage(devices=_primary_devices(rows))

    try:
        rows = source.query("Win32_DiskDrive")
    except CimQueryError as e:
        logger.warning(f"Storage detection failed: {e}")
        return FallbackStorage(devices=(), reason=f"{reason}; {e}")
    return FallbackStorage(devices=_legacy_devices(rows), reason=reason)
