"""Context-based safety tips and coarse time-only risk levels."""

from datetime import datetime

from safeher.geo_utils import LocationFix
from safeher.risk.scoring import RiskLevel, Weather

LOW_ACCURACY_M = 100.0
LOW_VISIBILITY_M = 1000.0

STATUS_MESSAGES = {
    "safe": "You are in a safe area. Stay alert and aware of your surroundings.",
    "moderate": "Moderate risk detected. Please stay alert and consider your safety.",
    "unsafe": "High risk area detected. Please leave immediately or call for help.",
}
UNKNOWN_STATUS_MESSAGE = "Safety status unknown. Please stay alert."

GENERAL_TIPS = [
    "Keep your phone charged and accessible",
    "Stay aware of your surroundings",
    "Trust your instincts - if something feels wrong, leave",
]


def _is_night(hour: int) -> bool:
    return hour >= 22 or hour <= 5


def generate_safety_recommendations(
    location: LocationFix | None = None,
    weather: Weather | None = None,
    now: datetime | None = None,
) -> list[str]:
    """Build safety tips from time of day, location accuracy and weather.

    General tips are always appended last.
    """
    now = now or datetime.now()
    recommendations = []

    if _is_night(now.hour):
        recommendations.append("It's late at night - stay in well-lit areas")
        recommendations.append("Consider calling a trusted contact to check in")

    if location is not None and location.accuracy_m is not None and location.accuracy_m > LOW_ACCURACY_M:
        recommendations.append("Location accuracy is low - stay alert")

    if weather is not None:
        if weather.visibility is not None and weather.visibility < LOW_VISIBILITY_M:
            recommendations.append("Low visibility - be extra cautious")
        if weather.precipitation is not None and weather.precipitation > 0:
            recommendations.append("Wet conditions - watch your step")

    recommendations.extend(GENERAL_TIPS)
    return recommendations


def quick_location_risk(now: datetime | None = None) -> RiskLevel:
    """Coarse risk level from the clock alone, for when no full assessment is possible.

    Night scores 3, evening/early morning 1, weekends add 1.
    4+ is Unsafe, 2-3 Moderate, otherwise Safe.
    """
    now = now or datetime.now()
    points = 0

    if _is_night(now.hour):
        points += 3
    elif now.hour >= 18 or now.hour <= 7:
        points += 1

    if now.weekday() >= 5:
        points += 1

    if points >= 4:
        return RiskLevel.UNSAFE
    if points >= 2:
        return RiskLevel.MODERATE
    return RiskLevel.SAFE


def safety_status_message(level: RiskLevel | str) -> str:
    """Sentence read aloud to the user for a risk level."""
    key = level.value if isinstance(level, RiskLevel) else str(level)
    return STATUS_MESSAGES.get(key.lower(), UNKNOWN_STATUS_MESSAGE)
