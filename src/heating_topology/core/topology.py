"""
Boiler topology model.

A BoilerTopology describes one boiler (a switch actuator plus a power
sensor with its standby band) and the ordered list of room climates that
can ask it for heat. All values are immutable; building a topology never
mutates an existing one.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from heating_topology.core.expressions import split_entity_id
from heating_topology.core.identifiers import derive_slug
from heating_topology.exceptions import ConfigurationError


# =============================================================================
# Entity References
# =============================================================================


@dataclass(frozen=True)
class ActuatorRef:
    """A controllable switch-like device (e.g., switch.boiler_plug)."""

    entity_id: str

    def __post_init__(self) -> None:
        split_entity_id(self.entity_id)

    @property
    def domain(self) -> str:
        return split_entity_id(self.entity_id)[0]

    @property
    def object_id(self) -> str:
        return split_entity_id(self.entity_id)[1]


@dataclass(frozen=True)
class SensorRef:
    """A readable numeric or state sensor."""

    entity_id: str

    def __post_init__(self) -> None:
        split_entity_id(self.entity_id)

    @property
    def domain(self) -> str:
        return split_entity_id(self.entity_id)[0]

    @property
    def object_id(self) -> str:
        return split_entity_id(self.entity_id)[1]


@dataclass(frozen=True)
class PowerRange:
    """Standby power band (watts) of the boiler's pump/control electronics."""

    low_watts: float
    high_watts: float

    def __post_init__(self) -> None:
        if self.low_watts > self.high_watts:
            raise ConfigurationError(
                f"Standby range low ({self.low_watts}) exceeds high ({self.high_watts})"
            )


# =============================================================================
# Climates
# =============================================================================


@dataclass(frozen=True)
class ClimateTarget:
    """
    A resolved heating zone.

    Attribute names are opaque; only the rule runtime interprets them.
    """

    climate_id: str
    name: str
    temperature_attribute: str
    setpoint_attribute: str
    heat_mode_attribute: str


@dataclass(frozen=True)
class DirectClimateRef:
    """An existing climate entity, e.g. a TRV exposed by the platform."""

    name: str
    climate_id: str
    temperature_attribute: str = "current_temperature"
    setpoint_attribute: str = "temperature"
    heat_mode_attribute: str = "hvac_action"

    @property
    def kind(self) -> str:
        return "direct"

    def resolve(self) -> ClimateTarget:
        split_entity_id(self.climate_id)
        return ClimateTarget(
            climate_id=self.climate_id,
            name=self.name,
            temperature_attribute=self.temperature_attribute,
            setpoint_attribute=self.setpoint_attribute,
            heat_mode_attribute=self.heat_mode_attribute,
        )


@dataclass(frozen=True)
class ComputedClimate:
    """
    A thermostat the runtime computes from a heater switch and a sensor.

    Resolves to ``climate.<slug(name)>`` and contributes a
    generic_thermostat platform entry to the backend package.
    """

    name: str
    heater: ActuatorRef
    target_sensor: SensorRef
    min_temp: float = 7.0
    max_temp: float = 30.0
    target_temp: float = 18.0
    cold_tolerance: float = 0.3
    hot_tolerance: float = 0.0

    @property
    def kind(self) -> str:
        return "computed"

    @property
    def unique_id(self) -> str:
        return derive_slug(self.name)

    def resolve(self) -> ClimateTarget:
        return ClimateTarget(
            climate_id=f"climate.{self.unique_id}",
            name=self.name,
            temperature_attribute="current_temperature",
            setpoint_attribute="temperature",
            heat_mode_attribute="hvac_action",
        )

    def to_platform_config(self) -> Dict[str, Any]:
        """Serialize as a generic_thermostat platform entry."""
        return {
            "platform": "generic_thermostat",
            "name": self.name,
            "unique_id": self.unique_id,
            "heater": self.heater.entity_id,
            "target_sensor": self.target_sensor.entity_id,
            "min_temp": self.min_temp,
            "max_temp": self.max_temp,
            "target_temp": self.target_temp,
            "cold_tolerance": self.cold_tolerance,
            "hot_tolerance": self.hot_tolerance,
        }


ClimateSource = DirectClimateRef | ComputedClimate


@dataclass(frozen=True)
class RoomClimate:
    """
    A room paired with one climate.

    The climate source is resolved to a ClimateTarget on construction.
    """

    room: str
    source: ClimateSource
    target: ClimateTarget = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        derive_slug(self.room)
        derive_slug(self.source.name)
        object.__setattr__(self, "target", self.source.resolve())

    @property
    def room_slug(self) -> str:
        return derive_slug(self.room)

    @property
    def climate_slug(self) -> str:
        return derive_slug(self.target.name)


# =============================================================================
# Topology
# =============================================================================


@dataclass(frozen=True)
class BoilerTopology:
    """
    Root aggregate: one boiler and the rooms that can demand heat.

    Attributes:
        actuator: Boiler on/off switch
        power_sensor: Power consumption sensor on the boiler supply
        standby_range: Power band when the boiler is powered but idle
        rooms: Ordered room climates (order carries into generated output)
    """

    actuator: ActuatorRef
    power_sensor: SensorRef
    standby_range: PowerRange
    rooms: Tuple[RoomClimate, ...] = ()

    def add_room_climate(self, *room_climates: RoomClimate) -> "BoilerTopology":
        """Return a new topology with the given room climates appended."""
        return replace(self, rooms=self.rooms + tuple(room_climates))

    @property
    def computed_climates(self) -> Tuple[ComputedClimate, ...]:
        return tuple(
            rc.source for rc in self.rooms if isinstance(rc.source, ComputedClimate)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (same shape accepted by from_dict)."""
        return {
            "actuator": self.actuator.entity_id,
            "power_sensor": self.power_sensor.entity_id,
            "standby_range": [self.standby_range.low_watts, self.standby_range.high_watts],
            "rooms": [
                {"room": rc.room, "climate": _serialize_source(rc.source)}
                for rc in self.rooms
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoilerTopology":
        """
        Deserialize from dict.

        Raises:
            ConfigurationError: If a required key is missing or malformed
        """
        try:
            low, high = data["standby_range"]
            return cls(
                actuator=ActuatorRef(data["actuator"]),
                power_sensor=SensorRef(data["power_sensor"]),
                standby_range=PowerRange(float(low), float(high)),
                rooms=tuple(
                    RoomClimate(room=r["room"], source=_parse_source(r["climate"]))
                    for r in data.get("rooms") or []
                ),
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing topology key: {e.args[0]}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed topology: {e}") from e


def _serialize_source(source: ClimateSource) -> Dict[str, Any]:
    if isinstance(source, ComputedClimate):
        return {
            "kind": "computed",
            "name": source.name,
            "heater": source.heater.entity_id,
            "target_sensor": source.target_sensor.entity_id,
            "min_temp": source.min_temp,
            "max_temp": source.max_temp,
            "target_temp": source.target_temp,
            "cold_tolerance": source.cold_tolerance,
            "hot_tolerance": source.hot_tolerance,
        }
    return {
        "kind": "direct",
        "name": source.name,
        "climate_id": source.climate_id,
        "temperature_attribute": source.temperature_attribute,
        "setpoint_attribute": source.setpoint_attribute,
        "heat_mode_attribute": source.heat_mode_attribute,
    }


def _parse_source(data: Dict[str, Any]) -> ClimateSource:
    if not isinstance(data, dict):
        raise ConfigurationError(f"Climate must be a mapping, got {data!r}")
    kind = data.get("kind", "direct")

    if kind == "direct":
        return DirectClimateRef(
            name=data["name"],
            climate_id=data["climate_id"],
            temperature_attribute=data.get("temperature_attribute", "current_temperature"),
            setpoint_attribute=data.get("setpoint_attribute", "temperature"),
            heat_mode_attribute=data.get("heat_mode_attribute", "hvac_action"),
        )
    elif kind == "computed":
        return ComputedClimate(
            name=data["name"],
            heater=ActuatorRef(data["heater"]),
            target_sensor=SensorRef(data["target_sensor"]),
            min_temp=data.get("min_temp", 7.0),
            max_temp=data.get("max_temp", 30.0),
            target_temp=data.get("target_temp", 18.0),
            cold_tolerance=data.get("cold_tolerance", 0.3),
            hot_tolerance=data.get("hot_tolerance", 0.0),
        )
    else:
        raise ConfigurationError(f"Unknown climate kind: {kind}")
