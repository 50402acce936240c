"""Checkout session state"""

from datetime import datetime, timezone
from typing import Optional
from dataclasses import dataclass, field

from ...models.checkout import CheckoutState

# Allowed transitions of a checkout attempt
TRANSITIONS: dict[CheckoutState, set[CheckoutState]] = {
    CheckoutState.IDLE: {CheckoutState.SUBMITTING},
    CheckoutState.SUBMITTING: {CheckoutState.REDIRECTING, CheckoutState.FAILED},
    CheckoutState.REDIRECTING: {CheckoutState.IDLE},
    CheckoutState.FAILED: {CheckoutState.SUBMITTING, CheckoutState.IDLE},
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CheckoutSession:
    """State of the current checkout attempt"""
    state: CheckoutState = CheckoutState.IDLE
    preference_id: Optional[str] = None
    redirect_url: Optional[str] = None
    error: Optional[str] = None
    attempts: int = 0
    updated_at: datetime = field(default_factory=_now)

    @property
    def in_flight(self) -> bool:
        return self.state in (CheckoutState.SUBMITTING, CheckoutState.REDIRECTING)

    def update_state(self, new_state: CheckoutState) -> None:
        """Move to new_state, rejecting transitions the state machine forbids"""
        if new_state not in TRANSITIONS[self.state]:
            raise ValueError(f"Invalid checkout transition {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.updated_at = _now()

    def reset(self) -> None:
        """Return to idle, dropping the result of the last attempt"""
        self.state = CheckoutState.IDLE
        self.preference_id = None
        self.redirect_url = None
        self.error = None
        self.updated_at = _now()
