"""Pydantic models and data structures for the harness."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field


class Verdict(str, Enum):
    """Classification of a single target execution."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    TIMEOUT = "timeout"


class CampaignState(str, Enum):
    """Lifecycle of a campaign."""

    RUNNING = "running"
    HALTED_ON_FAILURE = "halted_on_failure"
    COMPLETED = "completed"


class RejectionPolicy(str, Enum):
    """What the run controller does with a non-accepted verdict."""

    ABORT = "abort"
    RECORD = "record"


class MutatedInput(BaseModel):
    """One input derived from the seed by a single mutator."""

    model_config = {"frozen": True}

    value: str
    mutator: str
    position: int


class ExecutionResult(BaseModel):
    """Outcome of running the target once against one input."""

    exit_code: int | None = None
    output: str = ""
    timed_out: bool = False
    duration_seconds: float = 0.0

    @property
    def verdict(self) -> Verdict:
        if self.timed_out:
            return Verdict.TIMEOUT
        return Verdict.ACCEPTED if self.exit_code == 0 else Verdict.REJECTED


class CaseResult(BaseModel):
    """An executed input together with its result.

    ``position`` 0 is the seed itself (``mutator`` is None); mutated inputs
    follow from 1 in registration order.
    """

    mutator_set: str
    position: int
    mutator: str | None = None
    input: str
    result: ExecutionResult
    verdict: Verdict


class CampaignReport(BaseModel):
    """Everything recorded by one campaign."""

    command: str
    seed: str
    rng_seed: int | None = None
    policy: RejectionPolicy = RejectionPolicy.ABORT
    state: CampaignState = CampaignState.RUNNING
    cases: list[CaseResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def findings(self) -> list[CaseResult]:
        """Cases whose verdict is not ``accepted``."""
        return [c for c in self.cases if c.verdict is not Verdict.ACCEPTED]

    @property
    def success(self) -> bool:
        return self.state is CampaignState.COMPLETED and not self.findings

    def finalize(self, state: CampaignState) -> CampaignReport:
        """Mark the campaign finished with the given terminal state."""
        self.state = state
        self.finished_at = datetime.now(timezone.utc)
        return self


class PluginInfo(BaseModel):
    """Metadata about a discovered plugin."""

    name: str
    path: Path
    module_name: str
    plugin_type: str = ""
