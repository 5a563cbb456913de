"""Immutable inventory records produced by the collectors."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .parsers import BYTES_PER_GB


@dataclass(frozen=True)
class HostIdentity:
    hostname: str
    username: str


@dataclass(frozen=True)
class OsFacts:
    caption: str = "Unknown"
    version: str = "Unknown"
    architecture: str = "Unknown"
    boot_time: Optional[datetime] = None
    uptime: str = "Unknown"
    uptime_seconds: int = 0


@dataclass(frozen=True)
class CpuFacts:
    name: str = "Unknown"
    vendor: str = "Unknown"
    cores: int = 0
    threads: int = 0
    clock_ghz: float = 0.0
    extra: Optional[str] = None  # generation (Intel) or series/family (AMD)


@dataclass(frozen=True)
class GpuFacts:
    name: str
    vram_gb: float
    driver_version: str
    driver_date: str


@dataclass(frozen=True)
class MemoryModule:
    slot: str
    size_gb: float
    ddr_type: str
    speed_mhz: int
    manufacturer: str
    part_number: str


@dataclass(frozen=True)
class MemoryFacts:
    total_gb: float = 0.0
    modules: tuple[MemoryModule, ...] = ()


@dataclass(frozen=True)
class StorageDevice:
    name: str
    size_gb: float
    media_type: str  # 'SSD', 'HDD', 'HDD?', 'SCM', 'Unknown'
    bus_type: str
    serial: str


@dataclass(frozen=True)
class Volume:
    drive: str
    label: str
    filesystem: str
    total_bytes: int
    free_bytes: int

    @property
    def used_bytes(self) -> int:
        return self.total_bytes - self.free_bytes

    @property
    def used_gb(self) -> float:
        return round(self.used_bytes / BYTES_PER_GB, 2)

    @property
    def total_gb(self) -> float:
        return round(self.total_bytes / BYTES_PER_GB, 2)


@dataclass(frozen=True)
class SystemReport:
    """Complete inventory of the host, assembled once per run."""

    host: HostIdentity
    os: OsFacts
    cpu: CpuFacts
    memory: MemoryFacts
    gpus: tuple[GpuFacts, ...] = ()
    storage: tuple[StorageDevice, ...] = ()
    storage_source: str = "primary"
    volumes: tuple[Volume, ...] = ()
    network: tuple[str, ...] = ()
    collected_at: datetime = field(default_factory=datetime.now)
