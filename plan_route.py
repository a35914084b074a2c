"""Mini README: Entry point CLI for planning a recording route.

This script exposes a Typer CLI that builds a route from a home point, a
recording technique and a list of targets, then prints the resulting flight
plan as JSON. Default flight constraints and logging verbosity are drawn from
environment variables when available.
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional, Tuple

import typer

from shotplanner.errors import ShotPlannerError
from shotplanner.logging_utils import configure_root_logger
from shotplanner.model import Action, Target, Waypoint
from shotplanner.route import RecordingRoute
from shotplanner.techniques import REGISTRY

cli = typer.Typer(help="Plan drone recording routes from points of interest.")


def _parse_numbers(value: str, minimum: int, maximum: int) -> Tuple[float, ...]:
    """Split a comma separated list of numbers, checking how many were given."""

    try:
        numbers = tuple(float(part) for part in value.split(","))
    except ValueError as error:
        raise typer.BadParameter(f"'{value}' must be comma separated numbers") from error
    if not minimum <= len(numbers) <= maximum:
        raise typer.BadParameter(f"'{value}' must contain {minimum} to {maximum} numbers")
    return numbers


def _parse_parameter(value: str) -> Tuple[str, object]:
    """Turn ``key=value`` into a technique keyword argument."""

    key, separator, raw = value.partition("=")
    if not separator or not key:
        raise typer.BadParameter(f"Technique parameter '{value}' must look like key=value")
    lowered = raw.strip().lower()
    if lowered in {"true", "yes", "on"}:
        return key.strip(), True
    if lowered in {"false", "no", "off"}:
        return key.strip(), False
    try:
        return key.strip(), float(raw)
    except ValueError as error:
        raise typer.BadParameter(f"Technique parameter '{value}' is not a number or boolean") from error


@cli.command()
def techniques() -> None:
    """List the recording techniques that can be used with ``plan``."""

    for name in REGISTRY.available_techniques():
        typer.echo(name)


@cli.command()
def plan(
    home: str = typer.Option(..., help="Home point as LAT,LON."),
    technique: str = typer.Option("crane", help="Recording technique to apply."),
    param: List[str] = typer.Option([], help="Technique parameter as key=value, repeatable."),
    target: List[str] = typer.Option(..., help="Target as LAT,LON[,HEIGHT], repeatable."),
    record: bool = typer.Option(False, help="Start recording at the first technique waypoint."),
    log_level: Optional[str] = typer.Option(None, help="Logging level, defaults to settings."),
) -> None:
    """Build a route and print its flight plan as JSON."""

    configure_root_logger(log_level)

    home_latitude, home_longitude = _parse_numbers(home, 2, 2)
    parameters: Dict[str, object] = dict(_parse_parameter(item) for item in param)
    targets = []
    for item in target:
        numbers = _parse_numbers(item, 2, 3)
        targets.append(Target(numbers[0], numbers[1], numbers[2] if len(numbers) == 3 else 0.0))

    try:
        shot = REGISTRY.create(technique, **parameters)
        route = RecordingRoute(Waypoint(home_latitude, home_longitude))
        route.add_technique(shot)
        for point in targets:
            shot.add_target(point)
        if record and shot.route_points:
            shot.route_points[0].action = Action.START_RECORDING
            route.fix_actions()
    except ShotPlannerError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=2) from error

    report = {
        "technique": shot.technique_name,
        "parameters": shot.parameters(),
        "constraints": route.constraints.as_dict(),
        "total_flight_time": route.total_flight_time(),
        "waypoints": route.as_commands(),
        "violations": [violation.message for violation in route.constraint_violations()],
    }
    typer.echo(json.dumps(report, indent=2))


if __name__ == "__main__":
    cli()
