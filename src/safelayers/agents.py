"""Zero agents and the safety layers wrapped around them.

An agent's structure is a Peano numeral: a ``ZeroAgent`` is 0 and every
``LayeredAgent`` is the successor of its core, so ``3 = S(S(S(Z)))``.

A ``ZeroAgent`` acts as if its model were perfect. A ``LayeredAgent``
decides with its core, mutates the model, decides again and only confirms
the action when both decisions agree. Otherwise it still returns the
unmutated decision, flagged so the caller can request a model update (new
sensory information, or an assertion that the goal is specified correctly).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from safelayers.config import get_settings
from safelayers.errors import ActorMissingError
from safelayers.model import Actor, DecisionLogic, Mutator, mutate_model
from safelayers.outcome import Decision
from safelayers.probe import run_probes

M = TypeVar("M")
A = TypeVar("A")


class Decider(Protocol[M, A]):
    @property
    def depth(self) -> int: ...

    @property
    def zero(self) -> ZeroAgent[M, A]: ...

    def decide(self, model: M) -> Decision[A]: ...

    def act(self, model: M, action: A) -> M: ...


@dataclass(frozen=True, slots=True)
class ZeroAgent(Generic[M, A]):
    """Decides straight from the model, with no safety check.

    ``mutator`` is shared by every layer stacked on this agent unless a
    layer brings its own. ``actor`` applies an action to a model and is only
    needed by callers that drive the agent through ``act``.
    """

    logic: DecisionLogic[M, A]
    mutator: Mutator[M] = mutate_model
    actor: Actor[M, A] | None = None

    @property
    def depth(self) -> int:
        return 0

    @property
    def zero(self) -> ZeroAgent[M, A]:
        return self

    def decide(self, model: M) -> Decision[A]:
        return run_probes(self.logic, (), model)

    def act(self, model: M, action: A) -> M:
        if self.actor is None:
            raise ActorMissingError("no actor injected into the zero agent")
        return self.actor(model, action)

    def add(self, layers: int) -> ZeroAgent[M, A] | LayeredAgent[M, A]:
        """Wrap this agent in ``layers`` safety layers."""
        from safelayers.stack import build_stack

        return build_stack(self, layers)

    def inc(self) -> LayeredAgent[M, A]:
        return LayeredAgent(self)

    def dec(self) -> ZeroAgent[M, A]:
        return self


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class LayeredAgent(Generic[M, A]):
    """One safety layer around an exclusively owned core.

    Layers compare by identity: a core belongs to exactly one layer.
    """

    core: ZeroAgent[M, A] | LayeredAgent[M, A]
    mutator: Mutator[M] | None = None

    def unwind(self) -> tuple[ZeroAgent[M, A], tuple[Mutator[M], ...]]:
        """The zero agent and the mutator of every layer, outermost first.

        Walks the cores in a loop so stack depth is not bounded by the
        interpreter's recursion limit.
        """
        found: list[Mutator[M] | None] = []
        node: Any = self
        while isinstance(node, LayeredAgent):
            found.append(node.mutator)
            node = node.core
        fallback = node.mutator
        return node, tuple(fallback if item is None else item for item in found)

    @property
    def depth(self) -> int:
        count = 0
        node: Any = self
        while isinstance(node, LayeredAgent):
            count += 1
            node = node.core
        return count

    @property
    def zero(self) -> ZeroAgent[M, A]:
        node: Any = self.core
        while isinstance(node, LayeredAgent):
            node = node.core
        return node

    def mutators(self) -> tuple[Mutator[M], ...]:
        return self.unwind()[1]

    def decide(self, model: M) -> Decision[A]:
        settings = get_settings()
        zero, mutators = self.unwind()
        return run_probes(
            zero.logic,
            mutators,
            model,
            attempts=settings.safety_mutation_attempts,
            log_probes=bool(int(settings.safety_log_probes)),
        )

    def __repr__(self) -> str:
        return f"LayeredAgent(depth={self.depth}, zero={self.zero!r})"

    def act(self, model: M, action: A) -> M:
        return self.zero.act(model, action)

    def inc(self) -> LayeredAgent[M, A]:
        return LayeredAgent(self)

    def dec(self) -> ZeroAgent[M, A] | LayeredAgent[M, A]:
        return self.core
