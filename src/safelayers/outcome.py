"""Decision values returned by every decider."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from safelayers.model import Probe

A = TypeVar("A")


class SafetyOutcome(str, Enum):
    CONFIRMED = "confirmed"
    UPDATE_REQUESTED = "update_requested"


@dataclass(frozen=True, slots=True)
class Decision(Generic[A]):
    """An action tagged with the safety outcome that produced it.

    ``action`` is always usable, even when ``outcome`` asks for a model
    update. ``layer`` is the shallowest layer (0 = outermost) whose probe
    disagreed, ``None`` when confirmed. ``trail`` holds one record per layer
    with the action decided after that layer's mutation and whether the
    mutation changed the model at all.

    A Decision unpacks as ``action, outcome`` and compares equal to that
    pair, so callers that only care about the two core values can ignore the
    diagnostics.
    """

    action: A
    outcome: SafetyOutcome
    layer: int | None = None
    depth: int = 0
    trail: tuple[Probe[A], ...] = ()

    @property
    def probes(self) -> tuple[A, ...]:
        """Actions along the mutation chain, starting with the unmutated model."""
        return (self.action, *(probe.action for probe in self.trail))

    @property
    def confirmed(self) -> bool:
        return self.outcome is SafetyOutcome.CONFIRMED

    def __iter__(self) -> Iterator[Any]:
        yield self.action
        yield self.outcome

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Decision):
            return (
                self.action == other.action
                and self.outcome is other.outcome
                and self.layer == other.layer
                and self.depth == other.depth
                and self.trail == other.trail
            )
        if isinstance(other, tuple) and len(other) == 2:
            return self.action == other[0] and self.outcome == other[1]
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.action, self.outcome))

    def as_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "outcome": self.outcome.value,
            "layer": self.layer,
            "depth": self.depth,
            "probes": list(self.probes),
            "trail": [
                {"layer": probe.layer, "action": probe.action, "changed": probe.changed}
                for probe in self.trail
            ],
        }


def confirmed(
    action: A,
    *,
    depth: int = 0,
    trail: tuple[Probe[A], ...] = (),
) -> Decision[A]:
    return Decision(action, SafetyOutcome.CONFIRMED, None, depth, trail)


def update_requested(
    action: A,
    layer: int,
    *,
    depth: int = 0,
    trail: tuple[Probe[A], ...] = (),
) -> Decision[A]:
    return Decision(action, SafetyOutcome.UPDATE_REQUESTED, layer, depth, trail)
