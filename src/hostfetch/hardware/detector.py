"""Individual inventory collectors, each degrading to safe defaults."""

import getpass
import logging
import os
import socket
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    CpuFacts,
    GpuFacts,
    HostIdentity,
    MemoryFacts,
    MemoryModule,
    OsFacts,
    Volume,
)
from .parsers import (
    BYTES_PER_GB,
    as_int,
    as_str,
    classify_ddr,
    cpu_extra_label,
    format_uptime,
    to_gb,
)
from .source import (
    NETWORK_NAMESPACE,
    CimQueryError,
    InventorySource,
    parse_cim_datetime,
)

logger = logging.getLogger(__name__)

FIXED_DISK = 3
IPV4 = 2
PREFIX_ORIGIN_MANUAL = 1
PREFIX_ORIGIN_DHCP = 3


def detect_host() -> HostIdentity:
    """Host and user name from the environment, with library fallbacks."""
    hostname = os.environ.get("COMPUTERNAME") or socket.gethostname()
    username = os.environ.get("USERNAME")
    if not username:
        try:
            username = getpass.getuser()
        except (OSError, KeyError):
            username = "unknown"
    return HostIdentity(hostname=hostname, username=username)


def detect_os(source: InventorySource, now: Optional[datetime] = None) -> OsFacts:
    """Detect OS caption/version/architecture and format the uptime."""
    try:
        rows = source.query("Win32_OperatingSystem")
    except CimQueryError as e:
        logger.warning(f"OS detection failed: {e}")
        return OsFacts()
    if not rows:
        return OsFacts()

    row = rows[0]
    caption = as_str(row.get("Caption"), "Unknown")
    version = as_str(row.get("Version"), "Unknown")
    architecture = as_str(row.get("OSArchitecture"), "Unknown")

    boot_time = parse_cim_datetime(row.get("LastBootUpTime"))
    if boot_time is None:
        logger.debug("No usable LastBootUpTime reported")
        return OsFacts(caption=caption, version=version, architecture=architecture)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.astimezone()
    delta = now - boot_time
    return OsFacts(
        caption=caption,
        version=version,
        architecture=architecture,
        boot_time=boot_time,
        uptime=format_uptime(delta),
        uptime_seconds=max(int(delta.total_seconds()), 0),
    )


def detect_cpu(source: InventorySource) -> CpuFacts:
    """Detect the first processor and derive its generation/series label."""
    try:
        rows = source.query("Win32_Processor")
    except CimQueryError as e:
        logger.warning(f"CPU detection failed: {e}")
        return CpuFacts()
    if not rows:
        return CpuFacts()

    row = rows[0]
    name = as_str(row.get("Name"), "Unknown")
    vendor = as_str(row.get("Manufacturer"), "Unknown")
    return CpuFacts(
        name=name,
        vendor=vendor,
        cores=as_int(row.get("NumberOfCores")),
        threads=as_int(row.get("NumberOfLogicalProcessors")),
        clock_ghz=round(as_int(row.get("MaxClockSpeed")) / 1000, 2),
        extra=cpu_extra_label(name, vendor),
    )


def _format_driver_date(value: Any) -> str:
    stamp = parse_cim_datetime(value)
    return stamp.strftime("%Y-%m-%d") if stamp else ""


def detect_gpus(source: InventorySource) -> tuple[GpuFacts, ...]:
    """Detect every video adapter, ordered by name."""
    try:
        rows = source.query("Win32_VideoController")
    except CimQueryError as e:
        logger.warning(f"GPU detection failed: {e}")
        return ()

    gpus = [
        GpuFacts(
            name=as_str(row.get("Name"), "Unknown"),
            vram_gb=to_gb(row.get("AdapterRAM")),
            driver_version=as_str(row.get("DriverVersion")),
            driver_date=_format_driver_date(row.get("DriverDate")),
        )
        for row in rows
    ]
    return tuple(sorted(gpus, key=lambda g: g.name))


def detect_memory(source: InventorySource) -> MemoryFacts:
    """Detect installed memory modules and classify each module's DDR type."""
    try:
        rows = source.query("Win32_PhysicalMemory")
    except CimQueryError as e:
        logger.warning(f"Memory detection failed: {e}")
        return MemoryFacts()

    total_bytes = 0
    modules = []
    for row in rows:
        capacity = as_int(row.get("Capacity"))
        total_bytes += capacity
        speed = as_int(row.get("Speed")) or as_int(row.get("ConfiguredClockSpeed"))
        modules.append(
            MemoryModule(
                slot=as_str(row.get("DeviceLocator")) or as_str(row.get("BankLabel"), "Unknown"),
                size_gb=to_gb(capacity),
                ddr_type=classify_ddr(
                    smbios_type=row.get("SMBIOSMemoryType"),
                    memory_type=row.get("MemoryType"),
                    speed_mhz=speed,
                ),
                speed_mhz=speed,
                manufacturer=as_str(row.get("Manufacturer")),
                part_number=as_str(row.get("PartNumber")),
            )
        )

    return MemoryFacts(total_gb=round(total_bytes / BYTES_PER_GB, 2), modules=tuple(modules))


def detect_volumes(source: InventorySource) -> tuple[Volume, ...]:
    """Detect fixed local drives (no removable, optical or network drives)."""
    try:
        rows = source.query("Win32_LogicalDisk")
    except CimQueryError as e:
        logger.warning(f"Volume detection failed: {e}")
        return ()

    return tuple(
        Volume(
            drive=as_str(row.get("DeviceID"), "?"),
            label=as_str(row.get("VolumeName")),
            filesystem=as_str(row.get("FileSystem"), "Unknown"),
            total_bytes=as_int(row.get("Size")),
            free_bytes=as_int(row.get("FreeSpace")),
        )
        for row in rows
        if as_int(row.get("DriveType")) == FIXED_DISK
    )


def detect_network(source: InventorySource) -> tuple[str, ...]:
    """Detect manually configured or DHCP-assigned IPv4 addresses."""
    try:
        rows = source.query("MSFT_NetIPAddress", namespace=NETWORK_NAMESPACE)
    except CimQueryError as e:
        logger.debug(f"Network address query failed: {e}")
        return ()

    addresses = []
    for row in rows:
        if as_int(row.get("AddressFamily")) != IPV4:
            continue
        if as_int(row.get("PrefixOrigin")) not in (PREFIX_ORIGIN_MANUAL, PREFIX_ORIGIN_DHCP):
            continue
        address = as_str(row.get("IPAddress"))
        alias = as_str(row.get("InterfaceAlias"))
        if not address or address.startswith("169.254."):
            continue
        if "loopback" in alias.lower():
            continue
        addresses.append(f"{address} ({alias})")
    return tuple(addresses)
