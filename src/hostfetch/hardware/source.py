"""Inventory sources backed by the Windows CIM management interface."""

import json
import logging
import re
import subprocess
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "root/cimv2"
STORAGE_NAMESPACE = "root/Microsoft/Windows/Storage"
NETWORK_NAMESPACE = "root/StandardCimv2"

_JSON_DATE = re.compile(r"/Date\((-?\d+)\)/")
_DMTF_DATE = re.compile(r"^(\d{14})\.(\d{6})([+-]\d{3})$")


class CimQueryError(Exception):
    """Raised when an inventory query cannot be completed."""


class InventorySource(ABC):
    """Read-only access to the host's hardware inventory classes."""

    @abstractmethod
    def query(self, class_name: str, namespace: str = DEFAULT_NAMESPACE) -> list[dict[str, Any]]:
        """Return every instance of a CIM class as a plain dict.

        Raises:
            CimQueryError: If the class cannot be queried.
        """


class PowerShellCimSource(InventorySource):
    """Query CIM classes through ``Get-CimInstance | ConvertTo-Json``."""

    def __init__(self, executable: str = "powershell", timeout: int = 30) -> None:
        self.executable = executable
        self.timeout = timeout

    def _build_command(self, class_name: str, namespace: str) -> list[str]:
        script = (
            f"Get-CimInstance -Namespace '{namespace}' -ClassName '{class_name}' "
            "-ErrorAction Stop | ConvertTo-Json -Compress -Depth 2"
        )
        return [self.executable, "-NoProfile", "-NonInteractive", "-Command", script]

    def query(self, class_name: str, namespace: str = DEFAULT_NAMESPACE) -> list[dict[str, Any]]:
        cmd = self._build_command(class_name, namespace)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CimQueryError(f"{class_name}: {e}") from e

        if result.returncode != 0:
            err = result.stderr.strip() if result.stderr else f"exit code {result.returncode}"
            raise CimQueryError(f"{class_name}: {err}")

        return parse_cim_json(result.stdout, class_name)


def parse_cim_json(raw: str, class_name: str = "query") -> list[dict[str, Any]]:
    """Normalize ``ConvertTo-Json`` output into a list of dicts.

    A single instance serializes as an object and no instances as empty
    output, so both are folded into a list.
    """
    raw = raw.strip()
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CimQueryError(f"{class_name}: invalid JSON output: {e}") from e

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    raise CimQueryError(f"{class_name}: unexpected JSON payload {type(data).__name__}")


def parse_cim_datetime(value: Any) -> datetime | None:
    """Parse a CIM datetime in any of its serialized forms.

    Handles ``/Date(ms)/`` (Windows PowerShell), ISO-8601 (PowerShell 7) and
    DMTF ``yyyymmddHHMMSS.ffffff+UUU`` strings. Returns None when the value
    is missing or unrecognized.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.astimezone()
    if isinstance(value, dict):
        # -Depth 2 can expand a DateTime into an object with a DateTime member
        value = value.get("value") or value.get("DateTime")
    if not value or not isinstance(value, str):
        return None

    m = _JSON_DATE.search(value)
    if m:
        return datetime.fromtimestamp(int(m.group(1)) / 1000, tz=timezone.utc)

    m = _DMTF_DATE.match(value.strip())
    if m:
        stamp = datetime.strptime(m.group(1), "%Y%m%d%H%M%S")
        offset = timezone(timedelta(minutes=int(m.group(3))))
        return stamp.replace(microsecond=int(m.group(2)), tzinfo=offset)

    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Unrecognized CIM datetime: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed
