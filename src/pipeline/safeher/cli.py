"""Command-line interface for the SafeHer core."""

import json
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import click
import structlog

from safeher.alerts import (
    compose_check_in,
    compose_emergency_message,
    compose_incident_report,
    compose_location_update,
)
from safeher.config import get_config, reload_config
from safeher.geo_utils import Coordinate, LocationFix, distance_meters, google_maps_link
from safeher.places import PlaceType, SafePlaceFinder, load_safe_places
from safeher.risk import RiskFactors, RiskScorer, Weather, analyze_movement_patterns
from safeher.voice import classify_command, detect_sos_keyword

# Configure structlog for CLI output
import logging

logging.basicConfig(format="%(message)s", level=logging.INFO)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()

PLACE_TYPES = [t.value for t in PlaceType]


def _parse_coordinate(value: str) -> Coordinate:
    """Parse "LAT,LON" into a Coordinate."""
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        raise click.BadParameter(f"Expected LAT,LON but got {value!r}")
    return Coordinate(lat, lon)


def _parse_time(value: str | None) -> datetime:
    return datetime.fromisoformat(value) if value else datetime.now()


def _load_finder() -> SafePlaceFinder:
    data_path = get_config().safe_places.data_path
    return SafePlaceFinder(load_safe_places(Path(data_path) if data_path else None))


@click.group()
@click.option("--config-dir", type=click.Path(exists=True, path_type=Path), help="Configuration directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, verbose: bool) -> None:
    """SafeHer personal-safety toolkit."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if config_dir:
        reload_config(config_dir)

    if verbose:
        click.echo("Configuration loaded")


@cli.command()
@click.option("--lat", type=float, required=True, help="Latitude")
@click.option("--lon", type=float, required=True, help="Longitude")
@click.option("--at", "at_time", help="Assessment time (ISO 8601, default: now)")
@click.option("--alone", is_flag=True, help="User is alone")
@click.option("--dark-area", is_flag=True, help="Area is dark")
@click.option("--poor-lighting", is_flag=True, help="Lighting is poor")
@click.option("--recent-incidents", is_flag=True, help="Incidents were reported nearby recently")
@click.option("--weekend", is_flag=True, help="Apply the weekend bonus")
@click.option("--distracted", is_flag=True, help="User is distracted")
@click.option("--stationary-minutes", type=float, help="Minutes spent without moving")
@click.option("--speed", type=float, help="Current speed in km/h")
@click.option("--visibility", type=float, help="Visibility in meters")
@click.option("--precipitation", type=float, help="Precipitation in mm/h")
@click.option("--temperature", type=float, help="Temperature in °C")
@click.option("--seed", type=int, help="Seed for the placeholder location risk")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def assess(
    lat: float,
    lon: float,
    at_time: str | None,
    alone: bool,
    dark_area: bool,
    poor_lighting: bool,
    recent_incidents: bool,
    weekend: bool,
    distracted: bool,
    stationary_minutes: float | None,
    speed: float | None,
    visibility: float | None,
    precipitation: float | None,
    temperature: float | None,
    seed: int | None,
    as_json: bool,
) -> None:
    """Assess personal-safety risk at a location."""
    try:
        coordinate = Coordinate(lat, lon)
        now = _parse_time(at_time)

        weather = None
        if visibility is not None or precipitation is not None or temperature is not None:
            weather = Weather(visibility=visibility, precipitation=precipitation, temperature=temperature)

        factors = RiskFactors(
            is_alone=alone,
            is_dark_area=dark_area,
            is_poor_lighting=poor_lighting,
            has_recent_incidents=recent_incidents,
            is_weekend=weekend,
            weather=weather,
            is_stationary=stationary_minutes is not None,
            stationary_time_ms=int((stationary_minutes or 0) * 60_000),
            speed=speed,
            is_distracted=distracted,
        )

        settings = get_config().scoring
        if seed is not None:
            settings = replace(settings, location_risk_seed=seed)
        scorer = RiskScorer.from_settings(settings)

        result = scorer.assess(coordinate, factors, now)

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
            return

        click.echo(f"Risk level: {result.level.value} (score {result.score:.1f})")
        for name, value in result.factors.items():
            click.echo(f"  {name:<14} {value:6.1f}")
        click.echo("\nRecommendations:")
        for rec in result.recommendations:
            click.echo(f"  - {rec}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--lat", type=float, required=True, help="Latitude")
@click.option("--lon", type=float, required=True, help="Longitude")
@click.option("--type", "place_type", type=click.Choice(PLACE_TYPES), help="Only this kind of place")
@click.option("--max-distance", type=float, help="Search radius in meters (default from config)")
@click.option("--limit", type=int, help="Maximum number of results (default from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def nearest(
    lat: float,
    lon: float,
    place_type: str | None,
    max_distance: float | None,
    limit: int | None,
    as_json: bool,
) -> None:
    """Find the nearest safe places."""
    try:
        config = get_config()
        origin = Coordinate(lat, lon)
        finder = _load_finder()

        results = finder.find_nearest(
            origin,
            max_distance_meters=max_distance if max_distance is not None else config.safe_places.max_distance_m,
            limit=limit if limit is not None else config.safe_places.result_limit,
            type_filter=place_type,
        )

        if as_json:
            click.echo(json.dumps([r.to_dict() for r in results], indent=2))
            return

        if not results:
            click.echo("No safe places found in range")
            return

        click.echo(f"Found {len(results)} safe places:")
        for r in results:
            p = r.place
            click.echo(f"  {r.distance_meters:8.0f}m | {p.type.value:<8} | {p.name} | {p.phone} | {p.hours}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--type", "place_type", type=click.Choice(PLACE_TYPES), help="Only this kind of place")
def places(place_type: str | None) -> None:
    """List the safe place dataset."""
    try:
        finder = _load_finder()
        for p in finder.places:
            if place_type and p.type.value != place_type:
                continue
            click.echo(f"{p.id:>3} | {p.type.value:<8} | {p.name} | {p.address}")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--from", "origin", required=True, help="Origin as LAT,LON")
@click.option("--to", "destination", required=True, help="Destination as LAT,LON")
def distance(origin: str, destination: str) -> None:
    """Great-circle distance between two points."""
    try:
        a = _parse_coordinate(origin)
        b = _parse_coordinate(destination)
        click.echo(f"{distance_meters(a, b):.1f} m")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("kind", type=click.Choice(["emergency", "location", "check-in", "incident"]))
@click.option("--lat", type=float, help="Latitude")
@click.option("--lon", type=float, help="Longitude")
@click.option("--accuracy", type=float, help="Location accuracy in meters")
@click.option("--status", default="Safe", help="Check-in status")
@click.option("--incident-type", help="Incident type")
@click.option("--description", help="Incident description")
@click.option("--at", "at_time", help="Message time (ISO 8601, default: now)")
def message(
    kind: str,
    lat: float | None,
    lon: float | None,
    accuracy: float | None,
    status: str,
    incident_type: str | None,
    description: str | None,
    at_time: str | None,
) -> None:
    """Compose an SMS alert message."""
    try:
        now = _parse_time(at_time)
        fix = None
        if lat is not None and lon is not None:
            fix = LocationFix(coordinate=Coordinate(lat, lon), accuracy_m=accuracy)

        if kind == "emergency":
            text = compose_emergency_message(fix, now=now)
        elif kind == "location":
            if fix is None:
                raise click.UsageError("--lat and --lon are required for a location update")
            text = compose_location_update(fix, now=now)
        elif kind == "check-in":
            text = compose_check_in(status, fix, now=now)
        else:
            text = compose_incident_report(incident_type, description, fix, now=now)

        click.echo(text)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("history_file", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def movement(history_file: Path, as_json: bool) -> None:
    """Analyze movement patterns from a JSON list of location fixes."""
    try:
        with open(history_file) as f:
            raw = json.load(f)
        history = [LocationFix.from_dict(item) for item in raw]

        analysis = analyze_movement_patterns(history)

        if as_json:
            click.echo(json.dumps({
                "pattern": analysis.pattern,
                "recommendations": analysis.recommendations,
                "average_speed": analysis.average_speed,
                "average_direction_change": analysis.average_direction_change,
                "stop_count": analysis.stop_count,
            }, indent=2))
            return

        click.echo(f"Pattern: {analysis.pattern}")
        if analysis.average_speed is not None:
            click.echo(f"Average speed: {analysis.average_speed:.1f} km/h")
        click.echo(f"Stops: {analysis.stop_count}")
        if history:
            click.echo(f"Last position: {google_maps_link(history[-1].coordinate)}")
        for rec in analysis.recommendations:
            click.echo(f"  - {rec}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("transcript")
def voice(transcript: str) -> None:
    """Interpret a spoken command transcript."""
    command = classify_command(transcript)
    keyword = detect_sos_keyword(transcript)

    click.echo(f"Action: {command.action} (confidence {command.confidence:.1f})")
    click.echo(command.message)
    if keyword:
        click.echo(f"SOS keyword detected: {keyword}")


if __name__ == "__main__":
    cli()
