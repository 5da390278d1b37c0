"""Pydantic data models — evaluations and lookup verdicts.

The scoring engine, the registry clients and the MCP server all exchange
these objects. Evaluations are mutable: the engine updates them in place.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class EvaluationType(str, Enum):
    """Evaluation categories."""

    SIREN = "SIREN"
    VAT = "VAT"


class EvaluationState(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    UNCONFIRMED = "unconfirmed"


class EvaluationReason(str, Enum):
    """Reasons attached to an evaluation state.

    Only ONGOING_DATABASE_UPDATE and UNABLE_TO_REACH_API drive the engine;
    the company_* reasons are set by lookups. Evaluations may carry other
    free-form reasons; those are stored as given and never acted on.
    """

    ONGOING_DATABASE_UPDATE = "ongoing_database_update"
    UNABLE_TO_REACH_API = "unable_to_reach_api"
    COMPANY_OPENED = "company_opened"
    COMPANY_CLOSED = "company_closed"


MIN_SCORE = 0
MAX_SCORE = 100


class Verdict(BaseModel):
    """Normalized result of one registry lookup."""

    model_config = ConfigDict(frozen=True)

    state: EvaluationState
    reason: EvaluationReason
    score: int = Field(MAX_SCORE, ge=MIN_SCORE, le=MAX_SCORE)

    def apply_to(self, evaluation: Evaluation) -> None:
        """Overwrite state, reason and score of an evaluation."""
        evaluation.state = self.state
        evaluation.reason = self.reason
        evaluation.score = self.score


OPENED_VERDICT = Verdict(state=EvaluationState.FAVORABLE, reason=EvaluationReason.COMPANY_OPENED)
CLOSED_VERDICT = Verdict(state=EvaluationState.UNFAVORABLE, reason=EvaluationReason.COMPANY_CLOSED)
UNREACHABLE_VERDICT = Verdict(state=EvaluationState.UNCONFIRMED, reason=EvaluationReason.UNABLE_TO_REACH_API)


class Evaluation(BaseModel):
    """One entity's trust assessment for one evaluation type."""

    model_config = ConfigDict(validate_assignment=True)

    # Unknown categories are kept as plain strings and never dispatched.
    type: Union[EvaluationType, str] = Field(union_mode="left_to_right")
    value: str
    score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    state: EvaluationState
    # Free-form reasons are kept as plain strings.
    reason: Union[EvaluationReason, str] = Field(union_mode="left_to_right")

    @property
    def type_name(self) -> str:
        return self.type.value if isinstance(self.type, EvaluationType) else self.type

    @property
    def reason_name(self) -> str:
        return self.reason.value if isinstance(self.reason, EvaluationReason) else self.reason

    def __str__(self) -> str:
        return f"{self.type_name}, {self.value}, {self.score}, {self.state.value}, {self.reason_name}"
