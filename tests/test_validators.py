"""Tests for ui/validators.py - emergency number validation."""

import pytest

from riskmap.constants import EmergencyContactConfig
from riskmap.model.message import InvalidContactNumberMessage
from riskmap.ui.validators import validate_contact_number


class TestValidateContactNumber:
    """Validators return None when valid, a message otherwise."""

    @pytest.mark.parametrize("label,number", EmergencyContactConfig.CONTACTS)
    def test_configured_contacts_are_valid(self, label: str, number: str) -> None:
        assert validate_contact_number(label=label, number=number) is None

    @pytest.mark.parametrize("number", ["+911123456789", "99", "123456789012345"])
    def test_valid_numbers(self, number: str) -> None:
        assert validate_contact_number(label="x", number=number) is None

    @pytest.mark.parametrize("number", ["", "1", "1234567890123456", "10 0", "abc", "++100", "100-1"])
    def test_invalid_numbers(self, number: str) -> None:
        msg = validate_contact_number(label="Police", number=number)
        assert isinstance(msg, InvalidContactNumberMessage)
        assert msg.number == number
