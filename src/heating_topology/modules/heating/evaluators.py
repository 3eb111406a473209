"""
Reference evaluators for derived heating signals.

These mirror what the rule runtime computes from the generated templates,
so authors and tests can check a compiled topology against concrete
platform states. They read time only from the platform adapter.
"""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from heating_topology.core.topology import BoilerTopology, PowerRange, RoomClimate
from heating_topology.exceptions import ConfigurationError

from .models import (
    BURNING_STATE_ID,
    BURNING_TODAY_ID,
    REQUESTING_HEAT_ID,
    BurningState,
    DerivedSignal,
)
from .signals import CompiledSignals

if TYPE_CHECKING:
    from heating_topology.modules.automation.adapter import (
        PlatformAdapter,
        StateHistory,
    )

logger = logging.getLogger(__name__)


def classify_burning_state(
    actuator_state: Optional[str],
    power_reading: Optional[float],
    standby_range: PowerRange,
) -> BurningState:
    """
    Classify the boiler's operating mode.

    The switch being off wins over any power reading. With the switch on,
    a reading inside the standby band (inclusive) is the fault case.

    Args:
        actuator_state: Boiler switch state ("on"/"off")
        power_reading: Current power draw in watts (None reads as 0)
        standby_range: Standby power band

    Returns:
        The classified BurningState
    """
    if actuator_state == "off":
        return BurningState.OFF

    reading = power_reading if power_reading is not None else 0.0
    if reading < standby_range.low_watts:
        return BurningState.STANDBY
    elif reading > standby_range.high_watts:
        return BurningState.ON
    return BurningState.FAILED


def heat_needed(current: Any, setpoint: Any, heat_mode: Any) -> bool:
    """True if the zone is below its setpoint and not in heat mode "off"."""
    if current is None or setpoint is None:
        return False
    return float(current) < float(setpoint) and heat_mode != "off"


def count_requesting_heat(states: Iterable[bool]) -> int:
    """Count heat-needed signals that are currently true."""
    return sum(1 for state in states if state)


def on_time_in_window(
    history: "StateHistory",
    now: datetime,
    window: timedelta = timedelta(hours=24),
) -> timedelta:
    """
    Total time spent in the "on" state within the trailing window.

    Args:
        history: Chronological (timestamp, state) changes; each state holds
            until the next change, the last one until now
        now: End of the window
        window: Window length

    Returns:
        Accumulated on-time
    """
    window_start = now - window
    total = timedelta(0)

    for i, (changed_at, state) in enumerate(history):
        if state != BurningState.ON.value:
            continue
        until = history[i + 1][0] if i + 1 < len(history) else now
        start = max(changed_at, window_start)
        end = min(until, now)
        if end > start:
            total += end - start

    return total


class SignalEvaluator:
    """
    Evaluates compiled signals against platform state.

    Per-room signals are resolved back to their RoomClimate so the
    evaluation follows the same attributes the template references.
    """

    def __init__(
        self,
        platform: "PlatformAdapter",
        topology: BoilerTopology,
        signals: CompiledSignals,
        on_time_window_hours: int = 24,
    ) -> None:
        self._platform = platform
        self._topology = topology
        self._signals = signals
        self._window = timedelta(hours=on_time_window_hours)

        self._rooms: Dict[str, RoomClimate] = {}
        for rc, needed, diff in zip(topology.rooms, signals.heat_needed, signals.temp_diff):
            self._rooms[needed.entity_id] = rc
            self._rooms[diff.entity_id] = rc

    def evaluate(self, signal: DerivedSignal) -> Any:
        """
        Evaluate a signal's current value.

        Returns:
            BurningState, timedelta, int, bool, or float depending on kind
        """
        if signal.unique_id == BURNING_STATE_ID:
            return self.burning_state()
        elif signal.unique_id == BURNING_TODAY_ID:
            return self.burning_today()
        elif signal.unique_id == REQUESTING_HEAT_ID:
            return self.requesting_heat()
        elif signal in self._signals.heat_needed:
            return self.heat_needed(self._rooms[signal.entity_id])
        elif signal in self._signals.temp_diff:
            return self.temp_diff(self._rooms[signal.entity_id])
        else:
            raise ConfigurationError(
                f"Signal not part of this compilation: {signal.entity_id}"
            )

    def burning_state(self) -> BurningState:
        actuator = self._topology.actuator.entity_id
        power = self._topology.power_sensor.entity_id
        return classify_burning_state(
            self._platform.get_state(actuator),
            self._platform.get_numeric_state(power),
            self._topology.standby_range,
        )

    def burning_today(self) -> timedelta:
        history = self._platform.get_history(self._signals.burning_state.entity_id)
        return on_time_in_window(history, self._platform.get_current_time(), self._window)

    def heat_needed(self, rc: RoomClimate) -> bool:
        t = rc.target
        current = self._platform.get_attribute(t.climate_id, t.temperature_attribute)
        setpoint = self._platform.get_attribute(t.climate_id, t.setpoint_attribute)
        if current is None or setpoint is None:
            logger.warning(f"Temperature attributes unavailable: {t.climate_id}")
        return heat_needed(
            current, setpoint, self._platform.get_attribute(t.climate_id, t.heat_mode_attribute)
        )

    def temp_diff(self, rc: RoomClimate) -> float:
        t = rc.target
        current = self._platform.get_attribute(t.climate_id, t.temperature_attribute)
        setpoint = self._platform.get_attribute(t.climate_id, t.setpoint_attribute)
        return float(current or 0.0) - float(setpoint or 0.0)

    def requesting_heat(self) -> int:
        return count_requesting_heat(
            self.heat_needed(self._rooms[entity_id])
            for entity_id in self._signals.requesting_heat.sources
        )
