"""Click CLI group: settings and demo commands."""

from __future__ import annotations

import json

import click

from safelayers.config import get_settings, validate_settings_for_env
from safelayers.demo import run_counter
from safelayers.errors import ConfigError, LayerError
from safelayers.logging import bind_context, clear_context, configure_logging


@click.group()
def cli() -> None:
    """Safety-layer agent toolkit."""


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Print settings as JSON.")
def settings(json_output: bool) -> None:
    """Print resolved settings and whether they validate."""
    resolved = get_settings()
    try:
        validate_settings_for_env(resolved)
        problem = ""
    except ConfigError as exc:
        problem = str(exc)

    if json_output:
        payload = {"ok": not problem, "error": problem, "settings": resolved.model_dump()}
        click.echo(json.dumps(payload, sort_keys=True))
    else:
        for key, value in sorted(resolved.model_dump().items()):
            click.echo(f"{key}: {value}")
        click.echo(f"status: {problem or 'ok'}")
    if problem:
        raise SystemExit(1)


@cli.command()
@click.option(
    "--layers",
    type=int,
    default=None,
    help="Safety layers (default: SAFETY_DEFAULT_LAYERS).",
)
@click.option("--steps", type=int, default=10, show_default=True)
@click.option("--goal", type=int, default=4, show_default=True)
@click.option("--json", "json_output", is_flag=True, help="Print each step as JSON.")
def demo(layers: int | None, steps: int, goal: int, json_output: bool) -> None:
    """Walk a counter toward a goal with a layered agent."""
    resolved = get_settings()
    try:
        validate_settings_for_env(resolved)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    if steps <= 0:
        raise click.ClickException("--steps must be > 0")
    if goal < 0:
        raise click.ClickException("--goal must be >= 0")
    depth = resolved.safety_default_layers if layers is None else layers
    if depth < 0:
        raise click.ClickException("--layers must be >= 0")

    configure_logging(resolved.log_level, resolved.log_json)
    bind_context(command="demo", layers=depth)
    try:
        history = run_counter(depth, steps, goal=goal)
    except LayerError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        clear_context()

    for step in history:
        decision = step.decision
        if json_output:
            payload = {"goal": step.model.goal, "position": step.model.position}
            payload.update(decision.as_dict())
            click.echo(json.dumps(payload, sort_keys=True))
            continue
        line = (
            f"position={step.model.position} action={decision.action:+d} "
            f"{decision.outcome.value}"
        )
        if decision.layer is not None:
            line += f" (layer {decision.layer})"
        click.echo(line)
