"""
BPMN Model CLI Interface

Command-line tool for inspecting BPMN diagram files: element summaries,
flow edges, lanes and the succession order.
"""

import json
import logging
import sys
from dataclasses import replace
from typing import Any, Dict, List

import click

from bpmn_model.config import ModelConfig, ReferencePolicy
from bpmn_model.core.observability import LogLevel, ObservabilityConfig, ObservabilityManager
from bpmn_model.errors import DiagramError, NonTerminatingTraversalError, StartNotFoundError
from bpmn_model.parser import DiagramModel

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, json_output: bool) -> None:
    level = LogLevel.DEBUG if verbose else LogLevel.WARNING
    ObservabilityManager.initialize(
        ObservabilityConfig(
            service_name="bpmn-model-cli",
            log_level=level,
            json_logs=json_output,
            enable_tracing=False,
        )
    )
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _load_model(bpmn_file: str, strict: bool, verbose: bool, json_output: bool) -> DiagramModel:
    _setup_logging(verbose, json_output)

    config = ModelConfig.from_env()
    if strict:
        config = replace(config, reference_policy=ReferencePolicy.STRICT)

    model = DiagramModel(config)
    try:
        model.load_from_file(bpmn_file)
    except DiagramError as e:
        click.echo(f"Error loading diagram: {e}", err=True)
        sys.exit(1)
    return model


def _emit(data: Any, json_output: bool, lines: List[str]) -> None:
    if json_output:
        click.echo(json.dumps(data, indent=2))
    else:
        for line in lines:
            click.echo(line)


def common_options(func):
    func = click.option("--json-output", is_flag=True, help="Output in JSON format")(func)
    func = click.option(
        "--strict", is_flag=True, help="Fail on references that match no element"
    )(func)
    func = click.option("--verbose/--quiet", default=False, help="Verbose logging output")(func)
    func = click.argument("bpmn_file", type=click.Path(exists=True, dir_okay=False))(func)
    return func


@click.group()
def cli():
    """BPMN Model CLI - Inspect BPMN 2.0 process diagrams."""
    pass


@cli.command()
@common_options
def summary(bpmn_file: str, verbose: bool, strict: bool, json_output: bool) -> None:
    """
    Show element counts for a diagram.

    \b
    Examples:
        bpmn-model summary diagram.bpmn
        bpmn-model summary diagram.bpmn --json-output
    """
    model = _load_model(bpmn_file, strict, verbose, json_output)
    try:
        counts: Dict[str, int] = {
            "processes": len(model.processes()),
            "elements": len(model.elements()),
            "tasks": len(model.tasks()),
            "events": len(model.events()),
            "lanes": len(model.lanes()),
            "flows": len(model.flows()),
        }
    except DiagramError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit(
        {"file": bpmn_file, **counts},
        json_output,
        [f"{key}: {value}" for key, value in counts.items()],
    )


@cli.command()
@common_options
def flows(bpmn_file: str, verbose: bool, strict: bool, json_output: bool) -> None:
    """List message and sequence flows."""
    model = _load_model(bpmn_file, strict, verbose, json_output)
    edges = model.flows()
    _emit(
        [edge.model_dump(mode="json") for edge in edges],
        json_output,
        [f"{edge.kind.value}\t{edge.id}\t{edge.source_ref} -> {edge.target_ref}" for edge in edges],
    )


@cli.command()
@common_options
def succession(bpmn_file: str, verbose: bool, strict: bool, json_output: bool) -> None:
    """
    Print the linear execution order from the start event.

    Exits with status 2 when the diagram has no start flow or its flow loops.
    """
    model = _load_model(bpmn_file, strict, verbose, json_output)
    try:
        order = model.succession_order()
    except (StartNotFoundError, NonTerminatingTraversalError) as e:
        click.echo(f"Cannot compute succession: {e}", err=True)
        sys.exit(2)
    except DiagramError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit(
        [{"id": element.id, "tag": element.tag, "name": element.name} for element in order],
        json_output,
        [f"{step}. {element.id} ({element.tag}) {element.name or ''}".rstrip()
         for step, element in enumerate(order, start=1)],
    )


@cli.command()
@common_options
def lanes(bpmn_file: str, verbose: bool, strict: bool, json_output: bool) -> None:
    """List lanes with the elements they contain."""
    model = _load_model(bpmn_file, strict, verbose, json_output)
    try:
        listing = [(lane, model.elements_in_lane(lane)) for lane in model.lanes()]
    except DiagramError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit(
        [
            {"id": lane.id, "name": lane.name, "elements": [element.id for element in members]}
            for lane, members in listing
        ],
        json_output,
        [f"{lane.name}: {', '.join(element.id for element in members)}" for lane, members in listing],
    )


@cli.command()
def info() -> None:
    """Show version information."""
    from bpmn_model import __version__

    click.echo(
        json.dumps(
            {
                "name": "BPMN Model",
                "version": __version__,
                "description": "Typed, queryable models of BPMN 2.0 process diagrams",
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    cli()
