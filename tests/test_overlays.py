"""Tests for ui/overlays.py - loading gate, legend, emergency contacts."""

import threading

from streamlit.testing.v1 import AppTest

from riskmap.constants import EmergencyContactConfig, LegendConfig
from riskmap.model.message import InvalidContactNumberMessage
from riskmap.ui.overlays import EmergencyContact, EmergencyContactDialog, Legend, LoadingGate


class TestLoadingGate:
    """One-shot ready signal."""

    def test_starts_closed(self) -> None:
        gate = LoadingGate()
        assert not gate.is_ready
        assert gate.wait(timeout=0.01) is False

    def test_open_is_idempotent(self) -> None:
        gate = LoadingGate()
        gate.open()
        gate.open()
        assert gate.is_ready
        assert gate.wait(timeout=0) is True

    def test_opened_from_another_thread(self) -> None:
        gate = LoadingGate()
        worker = threading.Thread(target=gate.open)
        worker.start()
        assert gate.wait(timeout=5.0) is True
        worker.join()


class TestLegend:
    """Three tiers, highest first."""

    def test_entries(self) -> None:
        legend = Legend()
        assert legend.title == "Risk Levels"
        assert [(e.label, e.color) for e in legend.entries] == [
            ("High Risk", "#EF4444"),
            ("Medium Risk", "#F97316"),
            ("Low Risk", "#EAB308"),
        ]

    def test_html_contains_every_tier(self) -> None:
        html = Legend().to_html()
        for tier in LegendConfig.TIERS:
            assert LegendConfig.TIER_COLORS[tier] in html
            assert LegendConfig.TIER_LABELS[tier] in html


class TestEmergencyContacts:
    """Static contact list with tel: links."""

    def test_default_contacts(self) -> None:
        dialog = EmergencyContactDialog()
        assert [(c.label, c.number) for c in dialog.contacts] == EmergencyContactConfig.CONTACTS
        assert [c.number for c in dialog.contacts] == ["100", "102", "112"]

    def test_tel_uri(self) -> None:
        assert EmergencyContact(label="Police", number="100").tel_uri == "tel:100"

    def test_rows_carry_validation_errors(self) -> None:
        dialog = EmergencyContactDialog(contacts=[("Police", "100"), ("Broken", "call me")])
        (police, police_error), (broken, broken_error) = dialog.contact_rows()
        assert police.label == "Police" and police_error is None
        assert broken.label == "Broken"
        assert isinstance(broken_error, InvalidContactNumberMessage)
        assert broken_error.number == "call me"

    def test_empty_contact_list(self) -> None:
        assert EmergencyContactDialog(contacts=[]).contact_rows() == []


def _contact_dialog_body() -> None:
    from riskmap.ui.overlays import EmergencyContactDialog

    EmergencyContactDialog(contacts=[("Police", "100"), ("Broken", "call me")]).render_body()


class TestEmergencyContactRendering:
    """Invalid numbers are shown disabled and their message is toasted."""

    def test_invalid_number_toasts_and_disables(self) -> None:
        at = AppTest.from_function(_contact_dialog_body, default_timeout=30).run()
        assert not at.exception
        assert at.button(key="dial_Broken").disabled
        assert len(at.toast) == 1
        assert "Cannot dial Broken" in at.toast[0].value
        assert "call me" in at.toast[0].value

