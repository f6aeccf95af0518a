"""Protocol for campaign report formats."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from seedfuzz.core.schema import CampaignReport


class Reporter(Protocol):
    """Protocol for output formats (JSON, SARIF)."""

    format_name: str

    def report_campaign(self, report: CampaignReport, output: Path) -> None:
        """Write the campaign report to output path."""
        ...
