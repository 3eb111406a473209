"""
Platform adapter interface for the reference evaluators.

The adapter is a read-only view of platform state at one instant: entity
states, attributes, last-changed timestamps, state history, and the
current time. The evaluators never own a clock; all time comes from here.
"""

from abc import ABC, abstractmethod
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional, Tuple

StateHistory = List[Tuple[datetime, str]]


class PlatformAdapter(ABC):
    """
    Abstract read-only interface to platform state.

    The host integration provides a concrete implementation; tests use
    MockPlatformAdapter.
    """

    @abstractmethod
    def get_state(self, entity_id: str) -> Optional[str]:
        """
        Get the current state of an entity.

        Returns:
            Current state string, or None if entity doesn't exist
        """
        pass

    @abstractmethod
    def get_attribute(self, entity_id: str, attribute: str) -> Any:
        """
        Get an attribute of an entity.

        Returns:
            Attribute value, or None if unavailable
        """
        pass

    @abstractmethod
    def get_last_changed(self, entity_id: str) -> Optional[datetime]:
        """Get when the entity's state last changed."""
        pass

    @abstractmethod
    def get_history(self, entity_id: str) -> StateHistory:
        """
        Get the entity's recorded state changes.

        Returns:
            (timestamp, state) pairs in chronological order
        """
        pass

    @abstractmethod
    def get_current_time(self) -> datetime:
        """
        Get current time from platform.

        Returns:
            Current datetime (timezone-aware)
        """
        pass

    def get_numeric_state(self, entity_id: str) -> Optional[float]:
        """
        Get the numeric value of an entity's state.

        Returns:
            Numeric value, or None if unavailable/not numeric
        """
        state = self.get_state(entity_id)
        if state is None:
            return None
        try:
            return float(state)
        except ValueError:
            return None


class MockPlatformAdapter(PlatformAdapter):
    """
    Mock adapter for testing.

    Setting a state records it in the entity's history and updates its
    last_changed timestamp only when the value actually changes.
    """

    def __init__(self) -> None:
        self._states: Dict[str, str] = {}
        self._attributes: Dict[str, Dict[str, Any]] = {}
        self._last_changed: Dict[str, datetime] = {}
        self._history: Dict[str, StateHistory] = {}
        self._current_time: Optional[datetime] = None

    def set_state(
        self,
        entity_id: str,
        state: Any,
        changed_at: Optional[datetime] = None,
    ) -> None:
        """Set entity state for testing."""
        state = str(state)
        changed_at = changed_at or self.get_current_time()
        if self._states.get(entity_id) != state:
            self._last_changed[entity_id] = changed_at
            self._history.setdefault(entity_id, []).append((changed_at, state))
        self._states[entity_id] = state

    def set_attribute(self, entity_id: str, attribute: str, value: Any) -> None:
        """Set entity attribute for testing."""
        self._attributes.setdefault(entity_id, {})[attribute] = value

    def set_last_changed(self, entity_id: str, changed_at: datetime) -> None:
        """Override last_changed for testing."""
        self._last_changed[entity_id] = changed_at

    def set_current_time(self, dt: datetime) -> None:
        """Set current time for testing."""
        self._current_time = dt

    # PlatformAdapter implementation

    def get_state(self, entity_id: str) -> Optional[str]:
        return self._states.get(entity_id)

    def get_attribute(self, entity_id: str, attribute: str) -> Any:
        return self._attributes.get(entity_id, {}).get(attribute)

    def get_last_changed(self, entity_id: str) -> Optional[datetime]:
        return self._last_changed.get(entity_id)

    def get_history(self, entity_id: str) -> StateHistory:
        return list(self._history.get(entity_id, []))

    def get_current_time(self) -> datetime:
        if self._current_time:
            return self._current_time
        return datetime.now(UTC)
