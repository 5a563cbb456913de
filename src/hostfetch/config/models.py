"""Pydantic models for hostfetch configuration."""

from pydantic import BaseModel, Field


class HostfetchConfig(BaseModel):
    """Display and query settings, read from ``~/.hostfetch/config.yaml``."""

    color: bool = True
    art_color: str = "cyan"
    label_color: str = "bright_blue"
    show_swatch: bool = True
    query_timeout: int = Field(default=30, ge=1)  # seconds per CIM query
    powershell: str = "powershell"
