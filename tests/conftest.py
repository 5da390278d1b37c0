"""
Pytest fixtures for TrustIn tests. Registry clients are test doubles or
SireneClient instances backed by httpx.MockTransport; no test reaches the network.
"""

from __future__ import annotations

import pytest

from trust_in.core.models import (
    CLOSED_VERDICT,
    OPENED_VERDICT,
    Evaluation,
    EvaluationType,
    Verdict,
)
from trust_in.core.scoring import ScoreUpdateEngine


class StubClient:
    """Registry double returning a fixed verdict and recording queried identifiers."""

    def __init__(self, verdict: Verdict):
        self.verdict = verdict
        self.calls: list[str] = []

    async def lookup(self, identifier: str) -> Verdict:
        self.calls.append(identifier)
        return self.verdict


def make_evaluation(score, state, reason, type="SIREN", value="123456789") -> Evaluation:
    return Evaluation(type=type, value=value, score=score, state=state, reason=reason)


@pytest.fixture
def opened_client():
    return StubClient(OPENED_VERDICT)


@pytest.fixture
def closed_client():
    return StubClient(CLOSED_VERDICT)


@pytest.fixture
def engine_factory():
    def _build(client):
        return ScoreUpdateEngine(clients={EvaluationType.SIREN: client})
    return _build
