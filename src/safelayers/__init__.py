"""Agents wrapped in mutation-invariance safety layers."""

from safelayers.agents import Decider, LayeredAgent, ZeroAgent
from safelayers.model import Mutable, MutationTrail, Probe, mutate_model
from safelayers.outcome import Decision, SafetyOutcome
from safelayers.stack import build_stack, evaluate, layer_mutators

__all__ = [
    "Decider",
    "Decision",
    "LayeredAgent",
    "Mutable",
    "MutationTrail",
    "Probe",
    "SafetyOutcome",
    "ZeroAgent",
    "build_stack",
    "evaluate",
    "layer_mutators",
    "mutate_model",
]
