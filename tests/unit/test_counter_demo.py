"""Reaching a goal by unit steps, with and without safety layers."""

from safelayers.demo import CounterModel, counter_agent, counter_logic, run_counter
from safelayers.outcome import SafetyOutcome


def _positions(history) -> list[int]:
    return [step.model.position for step in history]


def test_counter_model_mutation_lowers_goal() -> None:
    assert CounterModel(4, 1).mutate() == CounterModel(3, 1)
    assert CounterModel(0, 2).mutate() == CounterModel(0, 2)


def test_counter_logic() -> None:
    assert counter_logic(CounterModel(4, 0)) == 1
    assert counter_logic(CounterModel(4, 5)) == -1
    assert counter_logic(CounterModel(4, 4)) == 0


def test_layer_count_decides_when_to_ask_for_update() -> None:
    model = CounterModel(4, 1)

    one = counter_agent(1)
    assert one.decide(model) == (1, SafetyOutcome.CONFIRMED)
    model = one.act(model, 1)
    assert model == CounterModel(4, 2)
    model = one.act(model, one.decide(model).action)
    assert model == CounterModel(4, 3)
    # Unsure whether the goal is 4 or 3.
    assert one.decide(model) == (1, SafetyOutcome.UPDATE_REQUESTED)

    two = counter_agent(2)
    model = CounterModel(4, 1)
    model = two.act(model, two.decide(model).action)
    assert model == CounterModel(4, 2)
    # Unsure whether the goal is 4, 3 or 2.
    assert two.decide(model) == (1, SafetyOutcome.UPDATE_REQUESTED)

    # Back down to one layer.
    one = two.dec()
    assert one.decide(model) == (1, SafetyOutcome.CONFIRMED)
    model = one.act(model, 1)
    assert one.decide(model).outcome is SafetyOutcome.UPDATE_REQUESTED

    # Back down to zero layers.
    zero = one.dec()
    assert zero.decide(model) == (1, SafetyOutcome.CONFIRMED)
    model = zero.act(model, 1)
    assert model == CounterModel(4, 4)
    assert zero.decide(model) == (0, SafetyOutcome.CONFIRMED)


def test_run_counter_without_layers_reaches_goal() -> None:
    history = run_counter(0, 10)
    assert _positions(history) == [0, 1, 2, 3, 4]
    assert history[-1].decision.action == 0
    assert all(step.decision.confirmed for step in history)


def test_run_counter_stops_on_update_request() -> None:
    one = run_counter(1, 10)
    assert _positions(one) == [0, 1, 2, 3]
    assert one[-1].decision.outcome is SafetyOutcome.UPDATE_REQUESTED
    assert one[-1].decision.layer == 0

    two = run_counter(2, 10)
    assert _positions(two) == [0, 1, 2]
    assert two[-1].decision.layer == 1


def test_run_counter_respects_step_limit() -> None:
    assert len(run_counter(0, 2)) == 2


def test_goal_zero_cannot_be_mutated() -> None:
    history = run_counter(3, 5, goal=0)
    assert len(history) == 1
    assert history[0].decision == (0, SafetyOutcome.CONFIRMED)
