"""SMS alert text composition.

Only the message bodies and recipient lists are built here; handing them to
the device SMS composer is the caller's job.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from safeher.config import get_config
from safeher.geo_utils import LocationFix, google_maps_link

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class EmergencyContact:
    """A trusted contact who may receive alerts."""

    id: str
    name: str
    phone: str | None = None
    is_emergency: bool = False


def _signature() -> str:
    return f"Sent via {get_config().messaging.app_name}"


def _accuracy_text(fix: LocationFix) -> str:
    return f"{round(fix.accuracy_m)}m" if fix.accuracy_m else "Unknown"


def _location_lines(fix: LocationFix, include_accuracy: bool = True) -> str:
    coord = fix.coordinate
    lines = [
        f"Latitude: {coord.latitude:.6f}",
        f"Longitude: {coord.longitude:.6f}",
    ]
    if include_accuracy:
        lines.append(f"Accuracy: {_accuracy_text(fix)}")
    return "\n".join(lines) + f"\n\n🗺️ View on Google Maps:\n{google_maps_link(coord)}\n\n"


def compose_emergency_message(fix: LocationFix | None = None, now: datetime | None = None) -> str:
    """Build the SOS message sent to emergency contacts."""
    now = now or datetime.now()
    message = "🚨 EMERGENCY ALERT 🚨\n\n"
    message += "I need help immediately!\n"
    message += f"Time: {now.strftime(TIMESTAMP_FORMAT)}\n\n"

    if fix is not None:
        message += "📍 My Location:\n" + _location_lines(fix)
    else:
        message += "📍 Location: Unable to get current location\n\n"

    message += "Please call me or come to my location immediately!\n\n"
    message += _signature()
    return message


def compose_location_update(fix: LocationFix, now: datetime | None = None) -> str:
    """Build a periodic location sharing message."""
    now = now or datetime.now()
    message = "📍 Location Update\n\n"
    message += f"Time: {now.strftime(TIMESTAMP_FORMAT)}\n"
    message += _location_lines(fix)
    message += _signature()
    return message


def compose_check_in(
    status: str = "Safe",
    fix: LocationFix | None = None,
    now: datetime | None = None,
) -> str:
    """Build a safety check-in message."""
    now = now or datetime.now()
    message = "✅ Safety Check-In\n\n"
    message += f"Status: {status}\n"
    message += f"Time: {now.strftime(TIMESTAMP_FORMAT)}\n\n"

    if fix is not None:
        message += "📍 Location:\n" + _location_lines(fix, include_accuracy=False)

    message += _signature()
    return message


def compose_incident_report(
    incident_type: str | None = None,
    description: str | None = None,
    fix: LocationFix | None = None,
    now: datetime | None = None,
) -> str:
    """Build an incident report message."""
    now = now or datetime.now()
    message = "⚠️ Incident Report\n\n"
    message += f"Type: {incident_type or 'Safety Incident'}\n"
    message += f"Description: {description or 'No description provided'}\n"
    message += f"Time: {now.strftime(TIMESTAMP_FORMAT)}\n\n"

    if fix is not None:
        message += "📍 Location:\n" + _location_lines(fix, include_accuracy=False)

    message += _signature()
    return message


def format_phone_number(phone_number: str) -> str:
    """Normalise a North American number to E.164; other input is returned as-is."""
    digits = re.sub(r"\D", "", phone_number)
    country_code = get_config().messaging.default_country_code

    if len(digits) == 10:
        return country_code + digits
    if len(digits) == 11 and digits.startswith("1"):
        return "+" + digits
    return phone_number


def is_valid_phone_number(phone_number: str) -> bool:
    digits = re.sub(r"\D", "", phone_number)
    return 10 <= len(digits) <= 15


def recipients(contacts: list[EmergencyContact], emergency_only: bool = False) -> list[str]:
    """Normalised phone numbers of contacts who can receive an SMS."""
    numbers = []
    for contact in contacts:
        if not contact.phone:
            continue
        if emergency_only and not contact.is_emergency:
            continue
        numbers.append(format_phone_number(contact.phone))
    return numbers
