"""JSON report output."""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any

from hostfetch import __version__
from hostfetch.hardware.models import SystemReport


def _default_serializer(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


def report_to_dict(report: SystemReport) -> dict[str, Any]:
    """Convert a system report to a JSON-serializable dict.

    Volume usage is exported both as exact byte counts and as rounded GB.
    """
    data = asdict(report)
    data["hostfetch_version"] = __version__
    data["volumes"] = [
        {
            **asdict(volume),
            "used_bytes": volume.used_bytes,
            "used_gb": volume.used_gb,
            "total_gb": volume.total_gb,
        }
        for volume in report.volumes
    ]
    return data


def render_json(report: SystemReport, indent: int = 2) -> str:
    """Serialize a system report as a JSON document."""
    return json.dumps(report_to_dict(report), indent=indent, default=_default_serializer)
