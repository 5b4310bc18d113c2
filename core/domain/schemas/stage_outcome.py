"""Outcomes returned by the rule-based extraction stages.

Each stage receives the current residual text and answers with exactly one
of these. ``MatchedButInvalid`` exists so that "the label was there but the
content was unusable" stays distinguishable from "nothing matched"; both
leave the residual text untouched.
"""
from dataclasses import dataclass
from typing import Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

Span = Tuple[int, int]


@dataclass(frozen=True)
class NoMatch:
    remainder: str


@dataclass(frozen=True)
class MatchedButInvalid:
    reason: str
    span: Span
    remainder: str


@dataclass(frozen=True)
class Matched(Generic[T]):
    value: T
    span: Span
    remainder: str


StageOutcome = Union[NoMatch, MatchedButInvalid, Matched]


def outcome_value(outcome: StageOutcome) -> Optional[object]:
    if isinstance(outcome, Matched):
        return outcome.value
    return None
