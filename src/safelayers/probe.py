"""Linear evaluation of a safety-layer stack.

Nesting layers literally makes every layer re-run its whole core twice,
once on the model and once on the mutated model, which doubles the work
per layer. Instead the stack is flattened into one decision function and
an outermost-first list of mutators, and the chain is walked once:

    1 = 0 0'
    2 = 0 1' = 0 0' 0''
    3 = 0 2' = 0 0' 1' = 0 0' 0'' 0'''

Layer k compares the action decided with mutations 0..k-1 applied against
the action decided with mutations 0..k applied. A depth-N stack therefore
calls the decision function N+1 times.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from safelayers.errors import LayerError
from safelayers.model import DecisionLogic, MutationTrail, Mutator
from safelayers.outcome import Decision, confirmed, update_requested

logger = logging.getLogger(__name__)

M = TypeVar("M")
A = TypeVar("A")


def run_probes(
    logic: DecisionLogic[M, A],
    mutators: Sequence[Mutator[M]],
    model: M,
    *,
    attempts: int = 1,
    log_probes: bool = False,
) -> Decision[A]:
    """Decide on ``model`` and probe the decision once per mutator.

    The returned action is always the one decided on the unmutated model.
    A layer whose mutator cannot produce a distinct model within
    ``attempts`` tries agrees automatically and costs no decision call.
    """
    if attempts < 1:
        raise LayerError(f"mutation attempts must be >= 1, got {attempts}")
    depth = len(mutators)
    trail: MutationTrail[M, A] = MutationTrail(model)
    first = logic(model)
    previous = first
    disagreement: int | None = None

    for index, mutator in enumerate(mutators):
        changed = trail.advance(mutator, attempts)
        current = logic(trail.head) if changed else previous
        trail.record(current, changed)
        if disagreement is None and current != previous:
            disagreement = index
        previous = current

    recorded = tuple(trail.probes)
    if disagreement is None:
        decision = confirmed(first, depth=depth, trail=recorded)
    else:
        decision = update_requested(first, disagreement, depth=depth, trail=recorded)

    fields: dict[str, object] = {
        "outcome": decision.outcome,
        "depth": depth,
        "layer": disagreement,
        "unchanged_layers": sum(1 for probe in recorded if not probe.changed),
    }
    if log_probes:
        fields["probes"] = list(decision.probes)
    if decision.confirmed:
        logger.debug("Safety decision confirmed at depth %d", depth, extra=fields)
    else:
        logger.info(
            "Safety decision requests model update: depth=%d layer=%d",
            depth,
            disagreement,
            extra=fields,
        )
    return decision
