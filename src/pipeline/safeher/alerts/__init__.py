"""SMS alert composition and recipient handling."""

from safeher.alerts.messages import (
    EmergencyContact,
    compose_check_in,
    compose_emergency_message,
    compose_incident_report,
    compose_location_update,
    format_phone_number,
    is_valid_phone_number,
    recipients,
)

__all__ = [
    "compose_emergency_message",
    "compose_location_update",
    "compose_check_in",
    "compose_incident_report",
    # Contacts
    "EmergencyContact",
    "format_phone_number",
    "is_valid_phone_number",
    "recipients",
]
