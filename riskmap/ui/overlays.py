"""Static overlays around the map: legend, emergency contacts, loading gate.

None of these share state with the map surface:
- Legend: read-only swatches for the three risk tiers
- EmergencyContactDialog: (label, number) list, dialing is delegated to the
  platform through tel: links
- LoadingGate: one-shot ready signal; the map is not drawn until it opens
"""

import logging
import threading
from dataclasses import dataclass

import streamlit as st

from riskmap.constants import EmergencyContactConfig, LegendConfig
from riskmap.model.message import ToastMessage
from riskmap.ui.validators import validate_contact_number

logger = logging.getLogger(__name__)


# =============================================================================
# LOADING GATE
# =============================================================================


class LoadingGate:
    """One-shot boolean gate.

    Starts closed; open() flips it once and for all. Other threads can block
    on wait() until it opens.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_ready(self) -> bool:
        return self._event.is_set()

    def open(self) -> None:
        """Mark initialization complete (idempotent)."""
        if not self._event.is_set():
            self._event.set()
            logger.info("Loading gate opened")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until ready. Returns False if the timeout expired first."""
        return self._event.wait(timeout=timeout)


# =============================================================================
# LEGEND
# =============================================================================


@dataclass(frozen=True)
class LegendEntry:
    tier: str
    label: str
    color: str  # "#RRGGBB"


class Legend:
    """Risk level legend card."""

    def __init__(self) -> None:
        self.title = LegendConfig.TITLE
        self.entries = [
            LegendEntry(tier=tier, label=LegendConfig.TIER_LABELS[tier], color=LegendConfig.TIER_COLORS[tier])
            for tier in LegendConfig.TIERS
        ]

    def to_html(self) -> str:
        rows = "".join(
            '<div style="display:flex;align-items:center;gap:8px;margin:4px 0">'
            f'<div style="width:16px;height:16px;border-radius:4px;background:{e.color}"></div>'
            f"<span>{e.label}</span></div>"
            for e in self.entries
        )
        return f"<div><b>ℹ️ {self.title}</b>{rows}</div>"

    def render(self) -> None:
        with st.container(border=True):
            st.markdown(self.to_html(), unsafe_allow_html=True)


# =============================================================================
# EMERGENCY CONTACTS
# =============================================================================


@dataclass(frozen=True)
class EmergencyContact:
    label: str
    number: str

    @property
    def tel_uri(self) -> str:
        """URI handed to the platform dialer."""
        return f"tel:{self.number}"


class EmergencyContactDialog:
    """Static list of emergency numbers, each a dial link."""

    def __init__(self, contacts: list[tuple[str, str]] | None = None) -> None:
        pairs = contacts if contacts is not None else EmergencyContactConfig.CONTACTS
        self.contacts = [EmergencyContact(label=label, number=number) for label, number in pairs]

    def contact_rows(self) -> list[tuple[EmergencyContact, ToastMessage | None]]:
        """Each contact with its validation error (None when dialable)."""
        return [
            (contact, validate_contact_number(label=contact.label, number=contact.number))
            for contact in self.contacts
        ]

    def render_body(self) -> None:
        """Contact rows: label on the left, dial link on the right.

        An undialable number is shown as a disabled button and its
        validation message is toasted.
        """
        for contact, error in self.contact_rows():
            col_label, col_button = st.columns([3, 1])
            col_label.write(contact.label)
            if error is not None:
                col_button.button(contact.number, disabled=True, help=error.message, key=f"dial_{contact.label}")
                error.display()
                continue
            col_button.link_button(contact.number, url=contact.tel_uri)

    def render_trigger(self) -> None:
        """Button that opens the contacts dialog."""

        @st.dialog(EmergencyContactConfig.TITLE)
        def _show() -> None:
            self.render_body()

        if st.button(f"📞 {EmergencyContactConfig.BUTTON_LABEL}", type="primary", key="open_contacts"):
            _show()
