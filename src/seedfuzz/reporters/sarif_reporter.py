"""SARIF reporter: write campaign findings in SARIF 2.1 format."""

from __future__ import annotations

import json
from pathlib import Path

from seedfuzz import __version__
from seedfuzz.core.schema import CampaignReport, CaseResult, Verdict

_SARIF_VERSION = "2.1.0"
_SARIF_SCHEMA = "https://docs.oasis-open.org/sarif/sarif/v2.1.0/cos02/schemas/sarif-schema-2.1.0.json"
_TOOL_NAME = "SeedFuzz"

_RULES = {
    Verdict.REJECTED: ("seedfuzz/rejected", "Target exited with a non-zero status"),
    Verdict.TIMEOUT: ("seedfuzz/timeout", "Target did not finish before the deadline"),
}


class SarifReporter:
    """Reporter that writes one SARIF error result per finding."""

    format_name: str = "sarif"

    def report_campaign(self, report: CampaignReport, output: Path) -> None:
        """Write findings as SARIF error results; accepted cases are omitted."""
        output = Path(output).resolve()
        output.parent.mkdir(parents=True, exist_ok=True)

        results = [_result(case) for case in report.findings]
        sarif = _sarif_envelope(results, report)
        output.write_text(json.dumps(sarif, indent=2), encoding="utf-8")


def _result(case: CaseResult) -> dict:
    rule_id, _ = _RULES[case.verdict]
    if case.verdict is Verdict.TIMEOUT:
        text = f"Timeout on {case.mutator_set}[{case.position}]"
    else:
        text = f"Exit code {case.result.exit_code} on {case.mutator_set}[{case.position}]"
    return {
        "ruleId": rule_id,
        "level": "error",
        "message": {"text": text},
        "properties": {
            "mutator_set": case.mutator_set,
            "position": case.position,
            "mutator": case.mutator,
            "input": case.input,
            "exit_code": case.result.exit_code,
            "output": case.result.output,
        },
    }


def _sarif_envelope(results: list[dict], report: CampaignReport) -> dict:
    """Wrap results in a SARIF 2.1 envelope."""
    return {
        "version": _SARIF_VERSION,
        "$schema": _SARIF_SCHEMA,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": _TOOL_NAME,
                        "version": __version__,
                        "rules": [
                            {"id": rule_id, "shortDescription": {"text": desc}}
                            for rule_id, desc in _RULES.values()
                        ],
                    }
                },
                "invocations": [
                    {
                        "commandLine": report.command,
                        "executionSuccessful": report.success,
                        "properties": {
                            "state": report.state.value,
                            "policy": report.policy.value,
                            "rng_seed": report.rng_seed,
                        },
                    }
                ],
                "results": results,
            }
        ],
    }
