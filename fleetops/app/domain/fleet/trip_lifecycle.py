"""
Trip status state machine.

Trips move forward only: a draft may be dispatched, completed or cancelled,
a dispatched trip may be completed or cancelled, and completed/cancelled
trips are terminal.
"""

from typing import Dict, FrozenSet

from fleetops.app.models.fleet_enums import TripStatus

ALLOWED_TRANSITIONS: Dict[TripStatus, FrozenSet[TripStatus]] = {
    TripStatus.DRAFT: frozenset({TripStatus.DISPATCHED, TripStatus.COMPLETED, TripStatus.CANCELLED}),
    TripStatus.DISPATCHED: frozenset({TripStatus.COMPLETED, TripStatus.CANCELLED}),
    TripStatus.COMPLETED: frozenset(),
    TripStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def can_transition(from_status: TripStatus, to_status: TripStatus) -> bool:
    return to_status in ALLOWED_TRANSITIONS[from_status]


def holds_vehicle(status: TripStatus) -> bool:
    """Only a dispatched trip keeps its vehicle on the road."""
    return status == TripStatus.DISPATCHED


def releases_vehicle(from_status: TripStatus, to_status: TripStatus) -> bool:
    """Leaving the dispatched state for a terminal one hands the vehicle back."""
    return holds_vehicle(from_status) and to_status in TERMINAL_STATUSES
