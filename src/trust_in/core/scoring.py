"""Trust score update engine.

Each evaluation category owns an update rule. A rule reads the evaluation's
(state, reason, score), then either re-queries the registry and resets all
three fields from the verdict, decays the score, or leaves it alone.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, Mapping, Optional, Protocol

from .models import (
    MIN_SCORE,
    Evaluation,
    EvaluationReason,
    EvaluationState,
    EvaluationType,
    Verdict,
)

logger = logging.getLogger(__name__)

FAVORABLE_DECAY = 1
UNREACHABLE_HIGH_DECAY = 5
UNREACHABLE_LOW_DECAY = 1
UNREACHABLE_HIGH_THRESHOLD = 50


class AuthorityClient(Protocol):
    async def lookup(self, identifier: str) -> Verdict: ...


UpdateRule = Callable[[Evaluation, AuthorityClient], Awaitable[None]]


def decrease(score: int, amount: int) -> int:
    """Lower a score without going below zero."""
    return max(MIN_SCORE, score - amount)


def needs_lookup(evaluation: Evaluation) -> bool:
    """A zero score or a registry that was mid-update last time both warrant a fresh query."""
    if evaluation.score == 0:
        return True
    return (
        evaluation.state == EvaluationState.UNCONFIRMED
        and evaluation.reason == EvaluationReason.ONGOING_DATABASE_UPDATE
    )


async def update_siren_evaluation(evaluation: Evaluation, client: AuthorityClient) -> None:
    """Apply the SIREN rule to one evaluation.

    Branches are tested in order and the first match wins:
    unfavorable is sticky, then lookup triggers, then favorable decay,
    then unreachable-API decay. Anything else is left unchanged.
    """
    if evaluation.state == EvaluationState.UNFAVORABLE:
        return

    if needs_lookup(evaluation):
        verdict = await client.lookup(evaluation.value)
        verdict.apply_to(evaluation)
        logger.info("Re-evaluated %s %s: %s/%s", evaluation.type_name, evaluation.value,
                    verdict.state.value, verdict.reason.value)
        return

    if evaluation.state == EvaluationState.FAVORABLE:
        evaluation.score = decrease(evaluation.score, FAVORABLE_DECAY)
    elif (
        evaluation.state == EvaluationState.UNCONFIRMED
        and evaluation.reason == EvaluationReason.UNABLE_TO_REACH_API
    ):
        if evaluation.score >= UNREACHABLE_HIGH_THRESHOLD:
            evaluation.score = decrease(evaluation.score, UNREACHABLE_HIGH_DECAY)
        else:
            evaluation.score = decrease(evaluation.score, UNREACHABLE_LOW_DECAY)


DEFAULT_RULES: dict[EvaluationType, UpdateRule] = {
    EvaluationType.SIREN: update_siren_evaluation,
}


class ScoreUpdateEngine:
    """Runs the registered update rule over a batch of evaluations.

    Args:
        clients: Registry client per evaluation type. Every type with a rule
            must have a client.
        rules: Update rule per evaluation type. Defaults to DEFAULT_RULES.
    """

    def __init__(
        self,
        clients: Mapping[EvaluationType, AuthorityClient],
        rules: Optional[Mapping[EvaluationType, UpdateRule]] = None,
    ):
        self.rules = dict(DEFAULT_RULES if rules is None else rules)
        missing = [t.value for t in self.rules if t not in clients]
        if missing:
            raise KeyError(f"No registry client configured for: {', '.join(missing)}")
        self.clients = dict(clients)

    async def update_all(self, evaluations: Iterable[Evaluation]) -> None:
        """Update every evaluation in place, one at a time, in input order."""
        for evaluation in evaluations:
            await self.update_one(evaluation)

    async def update_one(self, evaluation: Evaluation) -> None:
        rule = self.rules.get(evaluation.type)
        if rule is None:
            return
        await rule(evaluation, self.clients[evaluation.type])
