"""TrustIn MCP server.

FastMCP server exposing registry lookups and trust score updates.
Evaluations are not stored: callers send them in and persist what comes back.
Run: trust-in-mcp
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from .config import get_log_level
from .core.clients.sirene import SireneClient
from .core.models import Evaluation, EvaluationType
from .core.scoring import ScoreUpdateEngine

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
UPDATE = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=False, openWorldHint=True)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    logging.basicConfig(level=get_log_level(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.info("TrustIn server starting")
    yield


mcp = FastMCP(
    "TrustIn",
    instructions="Check whether French companies are still active and keep their trust scores up to date. Evaluations are scored 0-100 and decay between SIRENE registry lookups.",
    lifespan=lifespan,
)


def build_engine() -> ScoreUpdateEngine:
    """Engine wired to the live SIRENE registry."""
    return ScoreUpdateEngine(clients={EvaluationType.SIREN: SireneClient()})


def _parse_evaluations(payload: list[dict]) -> list[Evaluation]:
    evaluations = []
    for index, item in enumerate(payload):
        try:
            evaluations.append(Evaluation.model_validate(item))
        except ValidationError as exc:
            raise ValueError(f"Invalid evaluation at index {index}: {exc}") from exc
    return evaluations


# ─── Tool 1: Registry lookup ─────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def trust_lookup_siren(siren: str) -> dict:
    """Look up a company in the SIRENE registry by its SIREN number.

    Args:
        siren: 9-digit SIREN number (e.g., '832940670').
    """
    verdict = await SireneClient().lookup(siren)
    return {
        "siren": siren,
        **verdict.model_dump(mode="json"),
    }


# ─── Tool 2: Score update ────────────────────────────────────────────────────


@mcp.tool(annotations=UPDATE)
async def trust_update_scores(evaluations: list[dict]) -> dict:
    """Apply one update step to a batch of evaluations and return them.

    Each evaluation is a dict with type, value, score, state and reason, e.g.
    {"type": "SIREN", "value": "832940670", "score": 42,
     "state": "unconfirmed", "reason": "ongoing_database_update"}.
    Only SIREN evaluations change; other types come back untouched.

    Args:
        evaluations: Evaluations to update, returned in the same order.
    """
    parsed = _parse_evaluations(evaluations)
    before = [e.model_copy() for e in parsed]

    await build_engine().update_all(parsed)

    changed = sum(1 for old, new in zip(before, parsed) if old != new)
    return {
        "evaluations": [e.model_dump(mode="json") for e in parsed],
        "total": len(parsed),
        "changed": changed,
        "summary": f"Updated {len(parsed)} evaluation(s), {changed} changed.",
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
