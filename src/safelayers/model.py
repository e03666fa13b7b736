"""Model capabilities and the shared mutation trail.

A model is whatever an agent needs to decide without further sensing:
goals, sub-goals, physical state, theory-of-mind models of other agents.
The core never looks inside a model. It only asks for a mutated copy and
compares models for equality to spot mutations that changed nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, Self, TypeVar, runtime_checkable

from safelayers.errors import LayerError, MutationError

M = TypeVar("M")
A = TypeVar("A")

DecisionLogic = Callable[[M], A]
Mutator = Callable[[M], M]
Actor = Callable[[M, A], M]


@runtime_checkable
class Mutable(Protocol):
    def mutate(self) -> Self: ...


def mutate_model(model: Any) -> Any:
    """Default mutator: delegate to the model's own ``mutate()``."""
    mutate = getattr(model, "mutate", None)
    if not callable(mutate):
        raise MutationError(f"{type(model).__name__} has no mutate() and no mutator was injected")
    return mutate()


def same_model(left: object, right: object) -> bool:
    return left is right or bool(left == right)


@dataclass(frozen=True, slots=True)
class Probe(Generic[A]):
    """What one safety layer observed on its step of the mutation chain."""

    layer: int
    action: A
    changed: bool


@dataclass(slots=True)
class MutationTrail(Generic[M, A]):
    """One base model, the current head of the chain and a probe per layer.

    Layers never hold a model of their own. Each layer mutates the head
    left by the layer above it, so the chain is probed in depth.
    """

    base: M
    head: M = field(init=False)
    probes: list[Probe[A]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.head = self.base

    def __len__(self) -> int:
        return len(self.probes)

    def advance(self, mutator: Mutator[M], attempts: int = 1) -> bool:
        """Mutate the head, retrying until the result differs from it.

        Returns False when no distinct perturbation was found within
        ``attempts`` tries; the head is left untouched in that case.
        """
        if attempts < 1:
            raise LayerError(f"mutation attempts must be >= 1, got {attempts}")
        for _ in range(attempts):
            candidate = mutator(self.head)
            if not same_model(candidate, self.head):
                self.head = candidate
                return True
        return False

    def record(self, action: A, changed: bool) -> Probe[A]:
        probe = Probe(len(self.probes), action, changed)
        self.probes.append(probe)
        return probe
