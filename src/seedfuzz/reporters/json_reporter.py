"""JSON reporter: write a campaign report as JSON."""

from __future__ import annotations

from pathlib import Path

from seedfuzz.core.schema import CampaignReport


class JsonReporter:
    """Reporter that writes the full campaign report, findings included."""

    format_name: str = "json"

    def report_campaign(self, report: CampaignReport, output: Path) -> None:
        output = Path(output).resolve()
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
