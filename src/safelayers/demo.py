"""Counter scenario: reach a goal position by unit steps.

The model holds a goal and a position. Mutating it lowers the goal by one,
which stands in for the agent being unsure whether its goal is specified
correctly. Near the goal the lowered goal flips the decision, and a layered
agent asks for a model update instead of trusting its action.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from safelayers.agents import LayeredAgent, ZeroAgent
from safelayers.outcome import Decision
from safelayers.stack import build_stack


@dataclass(frozen=True, slots=True)
class CounterModel:
    goal: int
    position: int = 0

    def mutate(self) -> CounterModel:
        if self.goal > 0:
            return replace(self, goal=self.goal - 1)
        return self


def counter_logic(model: CounterModel) -> int:
    if model.position < model.goal:
        return 1
    if model.position > model.goal:
        return -1
    return 0


def counter_actor(model: CounterModel, action: int) -> CounterModel:
    return replace(model, position=model.position + action)


def counter_agent(layers: int) -> ZeroAgent[CounterModel, int] | LayeredAgent[CounterModel, int]:
    return build_stack(ZeroAgent(counter_logic, actor=counter_actor), layers)


@dataclass(slots=True)
class CounterStep:
    model: CounterModel
    decision: Decision[int]


def run_counter(layers: int, steps: int, goal: int = 4) -> list[CounterStep]:
    """Step toward ``goal`` until an update is requested or the goal is reached.

    The final entry holds the decision that stopped the run; its action is
    not applied.
    """
    agent = counter_agent(layers)
    model = CounterModel(goal)
    history: list[CounterStep] = []
    for _ in range(steps):
        decision = agent.decide(model)
        history.append(CounterStep(model, decision))
        if not decision.confirmed or decision.action == 0:
            break
        model = agent.act(model, decision.action)
    return history
