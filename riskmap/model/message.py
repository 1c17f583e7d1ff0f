"""Message - User-facing messages for the risk map UI.

Architecture:
- CENTER (above map): blue loading message while the LoadingGate is closed
- RIGHT (detail panel): ONE message describing the selected observation,
  colored by its risk tier, or a blue hint when nothing is selected
- Toasts: transient feedback (e.g. an invalid emergency number)

Design Principles:
- Maximum ONE message per panel location at any time
- Messages know their own display level; callers decide when to show them
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from riskmap.constants import LegendConfig
from riskmap.model.risk_observation import RiskObservation


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status/loading/low risk
    WARNING = "warning"  # Yellow - medium risk
    ERROR = "error"  # Red - high risk


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline (panels).

    These messages are rendered as st.info/st.warning/st.error blocks that persist
    in the UI until replaced.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications.

    Good for: validation failures, quick confirmations
    Bad for: context messages, status displays, detail panels
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES
# =============================================================================


@dataclass(frozen=True)
class InvalidContactNumberMessage(ToastMessage):
    """An emergency contact number the dialer would reject."""

    label: str
    number: str

    @property
    def icon(self) -> str:
        return "📵"

    @property
    def message(self) -> str:
        return f"Cannot dial {self.label}: '{self.number}' is not a valid phone number."


# =============================================================================
# PANEL MESSAGES
# =============================================================================


@dataclass(frozen=True)
class LoadingMessage(Message):
    """Shown while the map surface is initializing."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "⏳ Loading risk map..."


@dataclass(frozen=True)
class SelectionHintMessage(Message):
    """Shown in the detail panel when nothing is selected."""

    observation_count: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        if self.observation_count == 0:
            return "No risk observations to display."
        return f"Click one of the {self.observation_count} markers to see its details."


@dataclass(frozen=True)
class ObservationDetailMessage(Message):
    """Detail text for the selected observation, colored by risk tier."""

    observation: RiskObservation

    @property
    def level(self) -> MessageLevel:
        return {
            LegendConfig.HIGH: MessageLevel.ERROR,
            LegendConfig.MEDIUM: MessageLevel.WARNING,
            LegendConfig.LOW: MessageLevel.INFO,
        }[self.observation.risk_tier]

    @property
    def message(self) -> str:
        obs = self.observation
        tier_label = LegendConfig.TIER_LABELS[obs.risk_tier]
        return (
            f"**{obs.description or 'Risk observation'}**\n\n"
            f"Risk Score: {obs.risk_score:g} ({tier_label})\n\n"
            f"Location: {obs.lat:.4f}, {obs.lon:.4f}"
        )
