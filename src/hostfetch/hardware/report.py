"""Assemble a complete system report from the individual collectors."""

import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from .detector import (
    detect_cpu,
    detect_gpus,
    detect_host,
    detect_memory,
    detect_network,
    detect_os,
    detect_volumes,
)
from .models import CpuFacts, HostIdentity, MemoryFacts, OsFacts, SystemReport
from .source import InventorySource, PowerShellCimSource
from .storage import FallbackStorage, StorageResult, probe_storage

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _isolated(name: str, collect: Callable[[], T], default: T) -> T:
    """Run one collector, converting any unexpected error into its default."""
    try:
        return collect()
    except Exception as e:
        logger.warning(f"{name} collector failed unexpectedly: {e}")
        return default


def collect_report(
    source: Optional[InventorySource] = None,
    now: Optional[datetime] = None,
) -> SystemReport:
    """Run every collector in sequence and merge the results.

    Args:
        source: Inventory source to query; defaults to PowerShell CIM.
        now: Reference time for uptime, mainly for tests.

    Returns:
        A fully populated SystemReport.
    """
    source = source or PowerShellCimSource()

    host = _isolated("host", detect_host, HostIdentity(hostname="unknown", username="unknown"))
    os_facts = _isolated("os", lambda: detect_os(source, now=now), OsFacts())
    cpu = _isolated("cpu", lambda: detect_cpu(source), CpuFacts())
    gpus = _isolated("gpu", lambda: detect_gpus(source), ())
    memory = _isolated("memory", lambda: detect_memory(source), MemoryFacts())
    storage: StorageResult = _isolated(
        "storage", lambda: probe_storage(source), FallbackStorage(devices=())
    )
    volumes = _isolated("volumes", lambda: detect_volumes(source), ())
    network = _isolated("network", lambda: detect_network(source), ())

    logger.debug(
        f"Collected {len(gpus)} GPU(s), {len(memory.modules)} DIMM(s), "
        f"{len(storage.devices)} disk(s) via {storage.source} path"
    )

    return SystemReport(
        host=host,
        os=os_facts,
        cpu=cpu,
        gpus=gpus,
        memory=memory,
        storage=storage.devices,
        storage_source=storage.source,
        volumes=volumes,
        network=network,
        collected_at=now or datetime.now(),
    )
