"""Movement pattern analysis over a short location history."""

from dataclasses import dataclass, field

import structlog

from safeher.geo_utils import LocationFix, distance_meters

logger = structlog.get_logger()

MIN_SAMPLES = 3
STOP_DISTANCE_M = 10.0
FAST_AVERAGE_SPEED_KMH = 60.0
ERRATIC_DIRECTION_CHANGE_DEG = 90.0
MAX_NORMAL_STOPS = 3


@dataclass
class MovementAnalysis:
    """Summary of recent movement with safety recommendations."""

    pattern: str  # "insufficient_data" or "analyzed"
    recommendations: list[str] = field(default_factory=list)
    average_speed: float | None = None
    average_direction_change: float | None = None
    stop_count: int = 0


def _heading_change(previous: float, current: float) -> float:
    """Smallest angle between two compass headings, in [0, 180]."""
    diff = abs(current - previous) % 360
    return 360 - diff if diff > 180 else diff


def analyze_movement_patterns(history: list[LocationFix]) -> MovementAnalysis:
    """Analyze speed, heading changes and stops in a location history.

    Args:
        history: Location samples in chronological order.

    Returns:
        MovementAnalysis. Fewer than three samples yields pattern
        "insufficient_data".
    """
    if len(history) < MIN_SAMPLES:
        return MovementAnalysis(
            pattern="insufficient_data",
            recommendations=["Need more location data for analysis"],
        )

    speeds = []
    direction_changes = []
    stop_count = 0

    for prev, curr in zip(history, history[1:]):
        if prev.speed_kmh is not None and curr.speed_kmh is not None:
            speeds.append(curr.speed_kmh)
        if prev.heading_deg is not None and curr.heading_deg is not None:
            direction_changes.append(_heading_change(prev.heading_deg, curr.heading_deg))
        if distance_meters(prev.coordinate, curr.coordinate) < STOP_DISTANCE_M:
            stop_count += 1

    average_speed = sum(speeds) / len(speeds) if speeds else None
    average_direction_change = (
        sum(direction_changes) / len(direction_changes) if direction_changes else None
    )

    recommendations = []
    if average_speed is not None and average_speed > FAST_AVERAGE_SPEED_KMH:
        recommendations.append("Consider slowing down for safety")
    if average_direction_change is not None and average_direction_change > ERRATIC_DIRECTION_CHANGE_DEG:
        recommendations.append("Frequent direction changes detected - stay alert")
    if stop_count > MAX_NORMAL_STOPS:
        recommendations.append("Multiple stops detected - ensure you're in safe locations")

    logger.debug(
        "Movement analyzed",
        samples=len(history),
        average_speed=average_speed,
        average_direction_change=average_direction_change,
        stop_count=stop_count,
    )

    return MovementAnalysis(
        pattern="analyzed",
        recommendations=recommendations or ["Movement patterns appear normal"],
        average_speed=average_speed,
        average_direction_change=average_direction_change,
        stop_count=stop_count,
    )
