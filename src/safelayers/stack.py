"""Assemble and evaluate safety-layer stacks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from safelayers.agents import LayeredAgent, ZeroAgent
from safelayers.config import get_settings
from safelayers.errors import LayerError
from safelayers.model import Mutator
from safelayers.outcome import Decision
from safelayers.probe import run_probes

logger = logging.getLogger(__name__)

M = TypeVar("M")
A = TypeVar("A")


def build_stack(
    zero: ZeroAgent[M, A],
    layers: int | None = None,
    mutators: Sequence[Mutator[M] | None] | None = None,
) -> ZeroAgent[M, A] | LayeredAgent[M, A]:
    """Wrap ``zero`` in ``layers`` safety layers.

    ``mutators`` optionally gives each layer its own mutator, outermost
    first; ``None`` entries fall back to the zero agent's mutator. When
    ``layers`` is omitted it defaults to the mutator count, or to
    SAFETY_DEFAULT_LAYERS when no mutators are given either.
    """
    settings = get_settings()
    if layers is None:
        layers = len(mutators) if mutators is not None else settings.safety_default_layers
    if layers < 0:
        raise LayerError(f"layer count must be >= 0, got {layers}")
    if layers > settings.safety_max_layers:
        raise LayerError(
            f"layer count {layers} exceeds SAFETY_MAX_LAYERS={settings.safety_max_layers}"
        )
    if mutators is not None and len(mutators) != layers:
        raise LayerError(f"expected {layers} mutators, got {len(mutators)}")

    per_layer = list(mutators) if mutators is not None else [None] * layers
    agent: ZeroAgent[M, A] | LayeredAgent[M, A] = zero
    # Build from the core outward so the first mutator ends up outermost.
    for mutator in reversed(per_layer):
        agent = LayeredAgent(agent, mutator)
    logger.debug("Built safety stack with %d layers", layers)
    return agent


def layer_mutators(agent: ZeroAgent[M, A] | LayeredAgent[M, A]) -> tuple[Mutator[M], ...]:
    if isinstance(agent, ZeroAgent):
        return ()
    return agent.mutators()


def evaluate(
    agent: ZeroAgent[M, A] | LayeredAgent[M, A],
    model: M,
    *,
    attempts: int | None = None,
) -> Decision[A]:
    """Decide with ``agent``, overriding the per-layer mutation attempts."""
    settings = get_settings()
    if attempts is None:
        attempts = settings.safety_mutation_attempts
    if isinstance(agent, ZeroAgent):
        zero, mutators = agent, ()
    else:
        zero, mutators = agent.unwind()
    return run_probes(
        zero.logic,
        mutators,
        model,
        attempts=attempts,
        log_probes=bool(int(settings.safety_log_probes)),
    )
