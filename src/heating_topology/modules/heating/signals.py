"""
Derived signal compiler.

Compiles a BoilerTopology into the burning-state classifier, the daily
on-time aggregator, per-room heat-needed and temperature-difference
signals, and the aggregate count of rooms requesting heat.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from heating_topology.core.expressions import (
    format_number,
    render_is_state,
    render_state_attr,
    render_states,
)
from heating_topology.core.identifiers import derive_label
from heating_topology.core.topology import BoilerTopology, ComputedClimate, RoomClimate
from heating_topology.exceptions import IdentifierCollisionError

from .models import (
    BURNING_STATE_ID,
    BURNING_TODAY_ID,
    HEAT_NEEDED_SUFFIX,
    REQUESTING_HEAT_ID,
    TEMP_DIFF_SUFFIX,
    BurningState,
    DerivedSignal,
    HistoryStatsSignal,
    TemplateSignal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledSignals:
    """The full set of derived signals for one topology."""

    burning_state: TemplateSignal
    burning_today: HistoryStatsSignal
    requesting_heat: TemplateSignal
    heat_needed: Tuple[TemplateSignal, ...]
    temp_diff: Tuple[TemplateSignal, ...]

    def all(self) -> List[DerivedSignal]:
        """All signals in deterministic output order."""
        return [
            self.burning_state,
            self.burning_today,
            self.requesting_heat,
            *self.heat_needed,
            *self.temp_diff,
        ]

    def template_signals(self) -> List[TemplateSignal]:
        return [s for s in self.all() if isinstance(s, TemplateSignal)]

    def get(self, entity_id: str) -> Optional[DerivedSignal]:
        for signal in self.all():
            if signal.entity_id == entity_id:
                return signal
        return None


class SignalCompiler:
    """
    Compiles derived signals from a topology.

    Every identifier is derived deterministically from (signal kind, room
    slug, climate slug). A repeated identifier raises
    IdentifierCollisionError instead of overwriting.
    """

    def __init__(self, on_time_window_hours: int = 24) -> None:
        self._window_hours = on_time_window_hours

    def compile(self, topology: BoilerTopology) -> CompiledSignals:
        """
        Compile all derived signals.

        A topology with no rooms is valid here; its aggregate is constant 0.

        Raises:
            IdentifierCollisionError: If two rooms derive the same identifier
        """
        registry: Dict[str, str] = {}

        burning_state = self._register(
            registry, self._burning_state(topology), "burning state classifier"
        )
        burning_today = self._register(
            registry, self._burning_today(burning_state), "daily on-time aggregator"
        )

        heat_needed = []
        temp_diff = []
        for rc in topology.rooms:
            owner = f"{rc.room} / {rc.target.name}"
            if isinstance(rc.source, ComputedClimate):
                self._claim(registry, rc.target.climate_id, owner)
            heat_needed.append(self._register(registry, self._heat_needed(rc), owner))
            temp_diff.append(self._register(registry, self._temp_diff(rc), owner))

        requesting_heat = self._register(
            registry, self._requesting_heat(heat_needed), "aggregate demand"
        )

        compiled = CompiledSignals(
            burning_state=burning_state,
            burning_today=burning_today,
            requesting_heat=requesting_heat,
            heat_needed=tuple(heat_needed),
            temp_diff=tuple(temp_diff),
        )
        logger.debug(f"Compiled {len(registry)} identifiers for {len(topology.rooms)} rooms")
        return compiled

    def _register(self, registry: Dict[str, str], signal, owner: str):
        self._claim(registry, signal.entity_id, owner)
        return signal

    def _claim(self, registry: Dict[str, str], entity_id: str, owner: str) -> None:
        existing = registry.get(entity_id)
        if existing is not None:
            raise IdentifierCollisionError(entity_id, existing, owner)
        registry[entity_id] = owner
        logger.debug(f"Emitted {entity_id} ({owner})")

    # =========================================================================
    # Signal Builders
    # =========================================================================

    def _burning_state(self, topology: BoilerTopology) -> TemplateSignal:
        switch = topology.actuator.entity_id
        power = render_states(topology.power_sensor.entity_id)
        low = format_number(topology.standby_range.low_watts)
        high = format_number(topology.standby_range.high_watts)
        state = (
            f"{{% if {render_is_state(switch, 'off')} %}}\n"
            f"  {BurningState.OFF.value}\n"
            f"{{% elif {power} | float < {low} %}}\n"
            f"  {BurningState.STANDBY.value}\n"
            f"{{% elif {power} | float > {high} %}}\n"
            f"  {BurningState.ON.value}\n"
            "{% else %}\n"
            f"  {BurningState.FAILED.value}\n"
            "{% endif %}"
        )
        return TemplateSignal(
            unique_id=BURNING_STATE_ID,
            name="Boiler Burning State",
            state=state,
        )

    def _burning_today(self, burning_state: TemplateSignal) -> HistoryStatsSignal:
        return HistoryStatsSignal(
            unique_id=BURNING_TODAY_ID,
            name="Boiler burning today",
            source_entity_id=burning_state.entity_id,
            state=BurningState.ON.value,
            start=f"{{{{ now() - timedelta(hours={self._window_hours}) }}}}",
            end="{{ now() }}",
        )

    def _heat_needed(self, rc: RoomClimate) -> TemplateSignal:
        t = rc.target
        current = render_state_attr(t.climate_id, t.temperature_attribute)
        setpoint = render_state_attr(t.climate_id, t.setpoint_attribute)
        mode = render_state_attr(t.climate_id, t.heat_mode_attribute)
        return TemplateSignal(
            unique_id=f"{rc.room_slug}_{rc.climate_slug}_{HEAT_NEEDED_SUFFIX}",
            name=f"{derive_label(rc.room)} {derive_label(t.name)} Heat Needed",
            state=f'{{{{ {current} < {setpoint} and {mode} != "off" }}}}',
        )

    def _temp_diff(self, rc: RoomClimate) -> TemplateSignal:
        t = rc.target
        current = render_state_attr(t.climate_id, t.temperature_attribute)
        setpoint = render_state_attr(t.climate_id, t.setpoint_attribute)
        return TemplateSignal(
            unique_id=f"{rc.room_slug}_{rc.climate_slug}_{TEMP_DIFF_SUFFIX}",
            name=f"{derive_label(rc.room)} {derive_label(t.name)} Temp Diff",
            state=f"{{{{ ({current} | float) - ({setpoint} | float) }}}}",
        )

    def _requesting_heat(self, heat_needed: List[TemplateSignal]) -> TemplateSignal:
        sources = tuple(s.entity_id for s in heat_needed)
        if sources:
            id_list = ", ".join(f"'{entity_id}'" for entity_id in sources)
            state = f"{{{{ [ {id_list} ] | select('is_state', 'True') | list | length }}}}"
        else:
            state = "{{ 0 }}"
        return TemplateSignal(
            unique_id=REQUESTING_HEAT_ID,
            name="Radiators Requesting Heat",
            state=state,
            sources=sources,
        )
