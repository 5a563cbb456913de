"""Logo-aligned text summary of a system report."""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.text import Text

from hostfetch.hardware.models import SystemReport
from hostfetch.hardware.parsers import format_bytes

LOGO = (
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
    "################  ################",
)

# Normal then bright variants of the 16 standard terminal colors.
SWATCH_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
)

ART_GAP = 2


@dataclass(frozen=True)
class Fact:
    """One line of the facts column; a fact without a label is a heading."""

    value: str
    label: Optional[str] = None

    @property
    def plain(self) -> str:
        return f"{self.label}: {self.value}" if self.label else self.value


def build_facts(report: SystemReport) -> list[Fact]:
    """Turn a report into the ordered facts column, skipping missing values."""
    title = f"{report.host.username}@{report.host.hostname}"
    facts = [Fact(title), Fact("-" * len(title))]

    os_facts = report.os
    facts.append(Fact(f"{os_facts.caption} {os_facts.architecture}", "OS"))
    facts.append(Fact(os_facts.version, "Version"))
    if os_facts.boot_time is not None:
        facts.append(Fact(os_facts.uptime, "Uptime"))

    cpu = report.cpu
    facts.append(
        Fact(f"{cpu.name} ({cpu.cores}C/{cpu.threads}T) @ {cpu.clock_ghz:.2f} GHz", "CPU")
    )
    if cpu.extra:
        facts.append(Fact(cpu.extra, "CPU Info"))

    for gpu in report.gpus:
        details = [f"{gpu.vram_gb:.2f} GB"]
        if gpu.driver_version:
            details.append(f"driver {gpu.driver_version}")
        if gpu.driver_date:
            details.append(gpu.driver_date)
        facts.append(Fact(f"{gpu.name} ({', '.join(details)})", "GPU"))

    memory = report.memory
    facts.append(Fact(f"{memory.total_gb:.2f} GB", "Memory"))
    for module in memory.modules:
        value = f"{module.size_gb:.2f} GB {module.ddr_type}"
        if module.speed_mhz:
            value += f" @ {module.speed_mhz} MHz"
        maker = " ".join(part for part in (module.manufacturer, module.part_number) if part)
        if maker:
            value += f" ({maker})"
        facts.append(Fact(value, f"  {module.slot}"))

    for disk in report.storage:
        facts.append(
            Fact(f"{disk.name} ({disk.size_gb:.2f} GB, {disk.media_type}, {disk.bus_type})", "Disk")
        )

    for volume in report.volumes:
        name = f"{volume.drive} [{volume.label}]" if volume.label else volume.drive
        facts.append(
            Fact(
                f"{name} {format_bytes(volume.used_bytes)} / "
                f"{format_bytes(volume.total_bytes)} ({volume.filesystem})",
                "Volume",
            )
        )

    for address in report.network:
        facts.append(Fact(address, "IP"))

    return facts


def compose_rows(art: list[str], facts: list[str]) -> list[tuple[str, str]]:
    """Pair art and fact lines side by side.

    The art column is padded to the widest art line plus a gap. The result
    has ``max(len(art), len(facts))`` rows; the shorter side is padded with
    empty strings.
    """
    width = max((len(line) for line in art), default=0) + ART_GAP
    rows = []
    for i in range(max(len(art), len(facts))):
        left = art[i] if i < len(art) else ""
        right = facts[i] if i < len(facts) else ""
        rows.append((left.ljust(width), right))
    return rows


class TextReporter:
    """Render a report as a logo plus facts block."""

    def __init__(
        self,
        color: bool = True,
        art_color: str = "cyan",
        label_color: str = "bright_blue",
        show_swatch: bool = True,
        logo: tuple[str, ...] = LOGO,
    ) -> None:
        self.color = color
        self.art_color = art_color
        self.label_color = label_color
        self.show_swatch = show_swatch
        self.logo = logo

    def render_plain(self, report: SystemReport) -> list[str]:
        """Aligned lines without any color codes."""
        facts = [fact.plain for fact in build_facts(report)]
        return [(left + right).rstrip() for left, right in compose_rows(list(self.logo), facts)]

    def render_rich(self, report: SystemReport) -> list[Text]:
        """Aligned, styled lines followed by the color swatch bar."""
        facts = build_facts(report)
        rows = compose_rows(list(self.logo), [fact.plain for fact in facts])

        lines = []
        for i, (left, _) in enumerate(rows):
            line = Text()
            line.append(left, style=self.art_color)
            if i < len(facts):
                fact = facts[i]
                if fact.label:
                    line.append(fact.label, style=f"bold {self.label_color}")
                    line.append(f": {fact.value}")
                else:
                    line.append(fact.value, style="bold")
            lines.append(line)

        if self.show_swatch:
            lines.append(Text(""))
            lines.extend(self._swatch(len(rows[0][0]) if rows else 0))
        return lines

    @staticmethod
    def _swatch(indent: int) -> list[Text]:
        half = len(SWATCH_COLORS) // 2
        bars = []
        for colors in (SWATCH_COLORS[:half], SWATCH_COLORS[half:]):
            bar = Text(" " * indent)
            for name in colors:
                bar.append("   ", style=f"on {name}")
            bars.append(bar)
        return bars

    def print(self, report: SystemReport, console: Optional[Console] = None) -> None:
        console = console or Console(highlight=False, no_color=not self.color)
        if not self.color:
            for line in self.render_plain(report):
                console.print(Text(line), soft_wrap=True)
            return
        for line in self.render_rich(report):
            console.print(line, soft_wrap=True)
