"""
Data models for derived heating signals.

A derived signal is an identifier plus an expression the rule runtime
evaluates verbatim. Identifiers are the wire contract other automations
and dashboards use to reference these signals.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class BurningState(Enum):
    """Boiler operating mode as classified from switch state and power draw."""

    OFF = "off"  # Switch off
    STANDBY = "standby"  # Switch on, draw below the standby band
    ON = "on"  # Switch on, draw above the standby band (burning)
    FAILED = "failed"  # Switch on, draw inside the standby band (fault)


# Fixed identifiers
BURNING_STATE_ID = "boiler_burning_state"
BURNING_TODAY_ID = "boiler_burning_today"
REQUESTING_HEAT_ID = "radiators_requesting_heat"

HEAT_NEEDED_SUFFIX = "heat_needed"
TEMP_DIFF_SUFFIX = "temp_diff"


@dataclass(frozen=True)
class TemplateSignal:
    """
    A signal computed by a state template.

    Attributes:
        unique_id: Stable identifier, also the object id of entity_id
        name: Display name
        state: Template expression
        sources: Entity ids this signal aggregates over (empty if none)
    """

    unique_id: str
    name: str
    state: str
    sources: Tuple[str, ...] = ()

    @property
    def entity_id(self) -> str:
        return f"sensor.{self.unique_id}"

    def to_platform_config(self) -> Dict[str, Any]:
        """Serialize as a template sensor entry."""
        return {"name": self.name, "unique_id": self.unique_id, "state": self.state}


@dataclass(frozen=True)
class HistoryStatsSignal:
    """A signal measuring time a source entity spent in a state."""

    unique_id: str
    name: str
    source_entity_id: str
    state: str
    start: str
    end: str
    type: str = "time"

    @property
    def entity_id(self) -> str:
        return f"sensor.{self.unique_id}"

    def to_platform_config(self) -> Dict[str, Any]:
        """Serialize as a history_stats sensor entry."""
        return {
            "platform": "history_stats",
            "name": self.name,
            "unique_id": self.unique_id,
            "entity_id": self.source_entity_id,
            "state": self.state,
            "type": self.type,
            "start": self.start,
            "end": self.end,
        }


DerivedSignal = TemplateSignal | HistoryStatsSignal
