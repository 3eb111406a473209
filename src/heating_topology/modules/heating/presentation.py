"""
Presentation projector.

Projects compiled signal identifiers into a dashboard card: a graph of the
burning state over time plus a compact row with the boiler toggle, daily
on-time, and number of rooms requesting heat. Pure wiring of identifiers;
nothing here reads or influences signal values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from heating_topology.core.topology import ActuatorRef
from heating_topology.exceptions import ConfigurationError

from .models import BURNING_STATE_ID, BURNING_TODAY_ID, REQUESTING_HEAT_ID, BurningState
from .signals import CompiledSignals

# (state, color, label) bands of the burning-state graph
BURNING_STATE_BANDS: Tuple[Tuple[BurningState, str, str], ...] = (
    (BurningState.OFF, "#0e7490", "Off"),
    (BurningState.STANDBY, "#64748b", "Standby"),
    (BurningState.ON, "#ea580c", "On"),
)


@dataclass(frozen=True)
class MiniGraphCard:
    """Time-series graph of one state entity."""

    name: str
    entity_id: str
    hours_to_show: int = 3
    points_per_hour: int = 60

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "custom:mini-graph-card",
            "name": self.name,
            "entities": [self.entity_id],
            "line_width": 2,
            "font_size": 75,
            "smoothing": False,
            "hours_to_show": self.hours_to_show,
            "points_per_hour": self.points_per_hour,
            "color_thresholds": [
                {"color": color, "value": state.value}
                for state, color, _ in BURNING_STATE_BANDS
            ],
            "color_thresholds_transition": "hard",
            "state_map": [
                {"value": state.value, "label": label}
                for state, _, label in BURNING_STATE_BANDS
            ],
        }


@dataclass(frozen=True)
class EntityRowCard:
    """One entity row with a toggle and secondary entities alongside."""

    name: str
    entity_id: str
    icon: str
    entities: Tuple[Tuple[str, str], ...] = ()  # (entity_id, name)
    toggle: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "custom:multiple-entity-row",
            "entity": self.entity_id,
            "toggle": self.toggle,
            "entities": [{"entity": e, "name": n} for e, n in self.entities],
            "icon": self.icon,
            "name": self.name,
        }


@dataclass(frozen=True)
class PresentationBundle:
    """Vertical stack of cards summarizing the boiler."""

    title: str
    graph: MiniGraphCard
    row: EntityRowCard
    signal_ids: Tuple[str, ...] = field(default=())

    def referenced_entities(self) -> List[str]:
        """Signal identifiers referenced by the bundle."""
        return list(self.signal_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "type": "custom:vertical-stack-in-card",
            "cards": [self.graph.to_dict(), self.row.to_dict()],
        }


class PresentationProjector:
    """Builds the boiler presentation bundle from compiled signals."""

    def __init__(self, hours_to_show: int = 3, points_per_hour: int = 60) -> None:
        self._hours_to_show = hours_to_show
        self._points_per_hour = points_per_hour

    def project(self, signals: CompiledSignals, actuator: ActuatorRef) -> PresentationBundle:
        """
        Project signals into a presentation bundle.

        Raises:
            ConfigurationError: If a required signal is missing or is
                not the fixed-identifier signal the card expects
        """
        burning_state = self._require(signals.burning_state, BURNING_STATE_ID)
        burning_today = self._require(signals.burning_today, BURNING_TODAY_ID)
        requesting_heat = self._require(signals.requesting_heat, REQUESTING_HEAT_ID)

        graph = MiniGraphCard(
            name="On Time",
            entity_id=burning_state.entity_id,
            hours_to_show=self._hours_to_show,
            points_per_hour=self._points_per_hour,
        )
        row = EntityRowCard(
            name="Boiler",
            entity_id=actuator.entity_id,
            icon="mdi:fire",
            entities=(
                (burning_today.entity_id, "24h On Time"),
                (requesting_heat.entity_id, "Rad Heat Needed"),
            ),
        )
        return PresentationBundle(
            title="Boiler",
            graph=graph,
            row=row,
            signal_ids=(
                burning_state.entity_id,
                burning_today.entity_id,
                requesting_heat.entity_id,
            ),
        )

    def _require(self, signal, unique_id: str):
        if signal is None or signal.unique_id != unique_id:
            raise ConfigurationError(f"Presentation requires the {unique_id} signal")
        return signal
