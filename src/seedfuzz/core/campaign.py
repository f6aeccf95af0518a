"""Run controller: drive the seed and every derived input through the harness."""

from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from seedfuzz.core.engine import derive_inputs
from seedfuzz.core.harness import ProcessHarness
from seedfuzz.core.schema import (
    CampaignReport,
    CampaignState,
    CaseResult,
    RejectionPolicy,
    Verdict,
)
from seedfuzz.protocols import NamedMutator

log = logging.getLogger(__name__)

CaseCallback = Callable[[CaseResult], None]


class Campaign:
    """Executes inputs sequentially and applies the rejection policy.

    Features:
    - One pass per mutator set: the seed first, then each derived input in
      registration order
    - ``RejectionPolicy.ABORT`` stops at the first rejected or timed-out case
    - ``RejectionPolicy.RECORD`` keeps going and collects every finding
    - ``on_case`` is called after every execution (used by the CLI to print)
    """

    def __init__(
        self,
        harness: ProcessHarness,
        rng: random.Random,
        policy: RejectionPolicy = RejectionPolicy.ABORT,
        on_case: CaseCallback | None = None,
        rng_seed: int | None = None,
    ) -> None:
        self._harness = harness
        self._rng = rng
        self._policy = RejectionPolicy(policy)
        self._on_case = on_case
        self._rng_seed = rng_seed

    def run(
        self,
        seed: str,
        mutator_sets: Sequence[tuple[str, Sequence[NamedMutator]]],
    ) -> CampaignReport:
        """Run every pass and return the report.

        HarnessError and mutator exceptions propagate; the report is then
        left in the ``running`` state.
        """
        report = CampaignReport(
            command=self._harness.command,
            seed=seed,
            rng_seed=self._rng_seed,
            policy=self._policy,
        )
        for set_name, mutators in mutator_sets:
            inputs = derive_inputs(seed, mutators, self._rng)
            log.info("Running %s set: seed + %d mutated input(s)", set_name, len(inputs))
            cases = [(0, None, seed)] + [(m.position, m.mutator, m.value) for m in inputs]
            for position, mutator, text in cases:
                case = self._run_case(set_name, position, mutator, text)
                report.cases.append(case)
                if self._on_case is not None:
                    self._on_case(case)
                if case.verdict is Verdict.ACCEPTED:
                    continue
                log.warning(
                    "Finding in %s set at position %d (%s): verdict=%s exit_code=%s",
                    set_name, position, mutator or "seed", case.verdict.value, case.result.exit_code,
                )
                if self._policy is RejectionPolicy.ABORT:
                    return report.finalize(CampaignState.HALTED_ON_FAILURE)

        report.finalize(CampaignState.COMPLETED)
        log.info(
            "Campaign complete: %d case(s), %d finding(s)",
            len(report.cases), len(report.findings),
        )
        return report

    def _run_case(self, set_name: str, position: int, mutator: str | None, text: str) -> CaseResult:
        log.debug("Executing %s[%d] (%s)", set_name, position, mutator or "seed")
        result = self._harness.execute(text)
        return CaseResult(
            mutator_set=set_name,
            position=position,
            mutator=mutator,
            input=text,
            result=result,
            verdict=result.verdict,
        )
