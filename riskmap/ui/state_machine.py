"""Selection state machine for the risk map popup.

Uses python-statemachine for robust state management with:
- Clear state definitions
- Entry hooks for side effects
- Explicit event-driven transitions

Architecture Overview
---------------------
The selection controller decides which observation (if any) the detail
popup shows. The key pattern is:

1. User clicks a marker or map feature -> MapSurface sends `select`
2. User closes the popup -> MapSurface sends `dismiss`
3. StreamlitUIListener fires after_transition and calls trigger_rerun()
4. On the next render cycle MapSurface.compose() draws the popup (or not)

States (2 states):
    EMPTY: Nothing selected, no popup (initial)
    SELECTED: Exactly one observation selected, popup visible

Transitions:
    EMPTY -> SELECTED: select
    SELECTED -> SELECTED: select (replaces the previous observation)
    SELECTED -> EMPTY: dismiss
    EMPTY -> EMPTY: dismiss (no-op)

There is no terminal state; the machine lives as long as its MapSurface.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from statemachine import State, StateMachine

from riskmap.model.risk_observation import RiskObservation
from riskmap.ui import infra

logger = logging.getLogger(__name__)


@dataclass
class SelectionContext:
    """Shared context/model for the selection state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    observation: RiskObservation | None = None
    index: int | None = None  # Position in the GeoDataset, when known

    def clear(self) -> None:
        self.observation = None
        self.index = None

    def set(self, observation: RiskObservation, index: int | None) -> None:
        self.observation = observation
        self.index = index

    def __repr__(self) -> str:
        return f"SelectionContext(state={self.state}, index={self.index}, observation={self.observation!r})"


def changes_selection(source: State, target: State) -> bool:
    """False for the Empty self-loop, which leaves nothing to redraw."""
    return not (source.id == target.id == "empty")


class StreamlitUIListener:
    """Listener that refreshes the Streamlit UI after selection transitions.

    Keeps Streamlit out of the state machine itself: the machine only tracks
    state, this listener triggers the rerun that redraws the popup.

    Usage:
        sm = SelectionStateMachine(context=context)
        sm.add_listener(StreamlitUIListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        """Log the transition and trigger a Streamlit rerun."""
        if not changes_selection(source=source, target=target):
            logger.debug(f"[STATE] {event} ignored in {source.name}")
            return
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")
        infra.trigger_rerun()


class SelectionStateMachine(StateMachine):
    """State machine tracking the selected observation.

    States:
        empty: No observation selected
        selected: One observation selected (see context.observation)
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    empty = State("Empty", initial=True)
    selected = State("Selected")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    # Select an observation (replaces any previous selection)
    select = empty.to(selected) | selected.to.itself()
    # Close the popup; harmless when nothing is selected
    dismiss = selected.to(empty) | empty.to.itself()

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_empty(self) -> bool:
        """Check if nothing is selected."""
        return self.empty.is_active

    @property
    def is_selected(self) -> bool:
        """Check if an observation is selected."""
        return self.selected.is_active

    @property
    def selected_observation(self) -> RiskObservation | None:
        return self.context.observation

    @property
    def selected_index(self) -> int | None:
        return self.context.index

    # ==========================================================================
    # Hooks
    # ==========================================================================

    def before_select(self, observation: RiskObservation, index: int | None = None) -> None:
        """Store the new selection (replaces any previous one, no stacking)."""
        self.context.set(observation=observation, index=index)

    def on_enter_empty(self) -> None:
        """Hook: Entering empty state."""
        self.context.clear()

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: SelectionContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or SelectionContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> SelectionContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.states_map[self.current_state_value].name

    def __repr__(self) -> str:
        return f"SelectionStateMachine(state={self.get_state_name()}, model={self.context!r})"

    @staticmethod
    def create(
        add_ui_listener: bool = True,
        listeners: Iterable[object] = (),
    ) -> tuple["SelectionStateMachine", SelectionContext]:
        """Factory method to create state machine with context and listeners.

        Args:
            add_ui_listener: If True, adds StreamlitUIListener for auto rerun.
                             Set to False for testing or non-Streamlit usage.
            listeners: Listeners registered before the UI listener, so their
                       bookkeeping is done when the rerun is requested.

        Returns:
            Tuple of (SelectionStateMachine, SelectionContext)
        """
        context = SelectionContext()
        sm = SelectionStateMachine(context=context)
        for listener in listeners:
            sm.add_listener(listener)
        if add_ui_listener:
            sm.add_listener(StreamlitUIListener())
            logger.info("Created SelectionStateMachine with StreamlitUIListener")
        else:
            logger.info("Created SelectionStateMachine without UI listener")
        return sm, context
