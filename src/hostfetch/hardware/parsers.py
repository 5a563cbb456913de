"""Name-parsing heuristics, lookup tables and value formatting."""

import re
from dataclasses import dataclass
from datetime import timedelta
from types import MappingProxyType
from typing import Optional

BYTES_PER_GB = 1024**3

# Leading digit of a Ryzen series number -> architecture family guess.
AMD_ZEN_FAMILIES = MappingProxyType(
    {
        1: "Zen/Zen+",
        2: "Zen 2",
        3: "Zen 2/3 Mobile",
        4: "Zen 2 (Mobile)",
        5: "Zen 3",
        6: "Zen 3+/4 Mobile",
        7: "Zen 4",
        8: "Zen 5 (Est)",
    }
)

# SMBIOS memory device type codes (type 17 structure, "Memory Type" field).
SMBIOS_MEMORY_TYPES = MappingProxyType(
    {
        20: "DDR",
        21: "DDR2",
        22: "DDR2 FB-DIMM",
        24: "DDR3",
        25: "FBD2",
        26: "DDR4",
        27: "LPDDR",
        28: "LPDDR2",
        29: "LPDDR3",
        30: "LPDDR4",
        31: "Logical non-volatile device",
        32: "HBM",
        33: "HBM2",
        34: "DDR5",
        35: "LPDDR5",
        36: "HBM3",
    }
)

# Speed thresholds (MHz) for modules that report no usable type code.
DDR_SPEED_GUESSES = (
    (6400, "DDR5?"),
    (3200, "DDR4?"),
    (1600, "DDR3?"),
)

_INTEL_PATTERN = re.compile(
    r"Core(?:\(TM\))?\s*"
    r"(?:i[3579]|Ultra(?:\s+[3579])?|2(?:\s+(?:Duo|Quad|Extreme))?)"
    r"[\s-]+(?:CPU\s+)?[A-Za-z]?(\d{3,5})([A-Za-z]{0,3})",
    re.IGNORECASE,
)

_AMD_PATTERN = re.compile(
    r"Ryzen\s+(?:\w+\s+)?(?:PRO\s+)?([1-9]\d{3})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class IntelGeneration:
    generation: int
    suffix: Optional[str] = None

    @property
    def label(self) -> str:
        label = f"{ordinal(self.generation)} Gen"
        if self.suffix:
            label += f" ({self.suffix})"
        return label


@dataclass(frozen=True)
class AmdSeries:
    series: str
    architecture: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        if not self.architecture:
            return None
        return f"Ryzen {self.series} ({self.architecture})"


def ordinal(n: int) -> str:
    """Return ``n`` with its English ordinal suffix (1st, 2nd, 12th...)."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def parse_intel_name(name: str) -> Optional[IntelGeneration]:
    """Guess the generation of an Intel Core processor from its model name.

    Five-digit model numbers carry a two-digit generation (12700 -> 12),
    shorter ones a single digit (8250 -> 8).
    """
    m = _INTEL_PATTERN.search(name or "")
    if not m:
        return None
    digits, letters = m.group(1), m.group(2)
    generation = int(digits[:2]) if len(digits) >= 5 else int(digits[0])
    return IntelGeneration(generation=generation, suffix=letters.upper() or None)


def parse_amd_name(name: str) -> Optional[AmdSeries]:
    """Guess the Zen family of a Ryzen processor from its series number."""
    m = _AMD_PATTERN.search(name or "")
    if not m:
        return None
    series = m.group(1)
    return AmdSeries(series=series, architecture=AMD_ZEN_FAMILIES.get(int(series[0])))


def cpu_extra_label(name: str, vendor: str = "") -> Optional[str]:
    """Vendor-specific generation/series label, or None when nothing matches."""
    haystack = f"{vendor} {name}".lower()
    if "intel" in haystack:
        intel = parse_intel_name(name)
        return intel.label if intel else None
    if "amd" in haystack or "ryzen" in haystack:
        amd = parse_amd_name(name)
        return amd.label if amd else None
    return None


def as_int(value, default: int = 0) -> int:
    """Coerce a CIM field to int, returning ``default`` when missing or malformed."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_str(value, default: str = "") -> str:
    """Coerce a CIM field to a stripped string, ``default`` when blank."""
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _memory_type_label(code) -> Optional[str]:
    try:
        return SMBIOS_MEMORY_TYPES.get(int(code))
    except (TypeError, ValueError):
        return None


def classify_ddr(smbios_type=None, memory_type=None, speed_mhz=None) -> str:
    """Classify a memory module's DDR generation.

    SMBIOS type code first, then the legacy memory type code (same table),
    then a speed guess marked with ``?``.
    """
    label = _memory_type_label(smbios_type) or _memory_type_label(memory_type)
    if label:
        return label

    speed = speed_mhz or 0
    for threshold, guess in DDR_SPEED_GUESSES:
        if speed >= threshold:
            return guess
    return "Unknown"


def to_gb(size_bytes) -> float:
    """Convert a raw byte count to gigabytes rounded to two decimals."""
    try:
        return round(int(size_bytes) / BYTES_PER_GB, 2)
    except (TypeError, ValueError):
        return 0.0


def format_bytes(size_bytes: int) -> str:
    """Human-readable size using the smallest unit that keeps the value < 1024."""
    if not size_bytes:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size_bytes)
    i = 0
    while round(value, 2) >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    if i == 0:
        return f"{int(value)} B"
    return f"{value:.2f} {units[i]}"


def format_uptime(delta: timedelta) -> str:
    """Format an uptime duration as ``Nd Nh``, ``Nh Nm`` or ``Nm`` (truncated)."""
    total = max(int(delta.total_seconds()), 0)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes = rem // 60
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
