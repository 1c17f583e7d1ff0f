"""Validators - Input validation for the risk map.

Validators return Optional[Message]:
- None if valid
- A Message object if invalid (caller displays it)

Design Principles:
- No exceptions for expected validation failures
- Caller controls when/how to display the message
"""

import re

from riskmap.constants import EmergencyContactConfig
from riskmap.model.message import InvalidContactNumberMessage, ToastMessage

_PHONE_PATTERN = re.compile(
    rf"^\+?\d{{{EmergencyContactConfig.MIN_DIGITS},{EmergencyContactConfig.MAX_DIGITS}}}$"
)


def validate_contact_number(label: str, number: str) -> ToastMessage | None:
    """Validate that an emergency number is dialable.

    Returns:
        None if valid, InvalidContactNumberMessage if not 2-15 digits
        (optionally with a leading '+').
    """
    if not _PHONE_PATTERN.match(number):
        return InvalidContactNumberMessage(label=label, number=number)
    return None
