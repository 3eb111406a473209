"""Tests for the boiler topology model."""

import pytest

from heating_topology import (
    ActuatorRef,
    BoilerTopology,
    ClimateTarget,
    ComputedClimate,
    ConfigurationError,
    DirectClimateRef,
    PowerRange,
    RoomClimate,
    SensorRef,
)


@pytest.fixture
def topology():
    """Create an empty boiler topology."""
    return BoilerTopology(
        actuator=ActuatorRef("switch.boiler"),
        power_sensor=SensorRef("sensor.boiler_power"),
        standby_range=PowerRange(130, 200),
    )


class TestReferences:
    """Tests for actuator and sensor references."""

    def test_actuator_parts(self):
        ref = ActuatorRef("switch.0x04cf8cdf3c89dcdd")
        assert ref.domain == "switch"
        assert ref.object_id == "0x04cf8cdf3c89dcdd"

    def test_sensor_parts(self):
        ref = SensorRef("sensor.boiler_power")
        assert ref.domain == "sensor"
        assert ref.object_id == "boiler_power"

    def test_malformed_reference(self):
        with pytest.raises(ConfigurationError):
            ActuatorRef("boiler")

    def test_immutable(self):
        """Test references cannot be modified after construction."""
        ref = ActuatorRef("switch.boiler")
        with pytest.raises(AttributeError):
            ref.entity_id = "switch.other"


class TestPowerRange:
    """Tests for the standby power band."""

    def test_valid_range(self):
        power_range = PowerRange(130, 200)
        assert power_range.low_watts == 130
        assert power_range.high_watts == 200

    def test_degenerate_range_allowed(self):
        """Test low == high is a valid (single-point) band."""
        assert PowerRange(150, 150).low_watts == 150

    def test_low_above_high_rejected(self):
        with pytest.raises(ConfigurationError):
            PowerRange(200, 130)


class TestClimateSources:
    """Tests for direct and computed climate resolution."""

    def test_direct_resolves_to_itself(self):
        source = DirectClimateRef(
            name="Lounge corner TRV",
            climate_id="climate.tze200_thermostat_2",
            temperature_attribute="local_temperature",
            setpoint_attribute="current_heating_setpoint",
            heat_mode_attribute="system_mode",
        )
        rc = RoomClimate("Lounge", source)

        assert source.kind == "direct"
        assert rc.target == ClimateTarget(
            climate_id="climate.tze200_thermostat_2",
            name="Lounge corner TRV",
            temperature_attribute="local_temperature",
            setpoint_attribute="current_heating_setpoint",
            heat_mode_attribute="system_mode",
        )

    def test_computed_resolves_to_slug_climate(self):
        source = ComputedClimate(
            name="End bedroom electric",
            heater=ActuatorRef("switch.0x04cf8cdf3c89dcdd"),
            target_sensor=SensorRef("sensor.0xa4c138bf686fe61c_temperature"),
        )
        rc = RoomClimate("End Bedroom", source)

        assert source.kind == "computed"
        assert rc.target.climate_id == "climate.end_bedroom_electric"
        assert rc.target.temperature_attribute == "current_temperature"
        assert rc.target.setpoint_attribute == "temperature"

    def test_computed_platform_config(self):
        source = ComputedClimate(
            name="Toms office electric",
            heater=ActuatorRef("switch.shelly_shsw_1"),
            target_sensor=SensorRef("sensor.office_temperature"),
            target_temp=19.0,
        )
        config = source.to_platform_config()

        assert config["platform"] == "generic_thermostat"
        assert config["unique_id"] == "toms_office_electric"
        assert config["heater"] == "switch.shelly_shsw_1"
        assert config["target_sensor"] == "sensor.office_temperature"
        assert config["target_temp"] == 19.0

    def test_room_climate_slugs(self):
        rc = RoomClimate("Main Bedroom", DirectClimateRef("Wardrobe TRV", "climate.trv_9"))
        assert rc.room_slug == "main_bedroom"
        assert rc.climate_slug == "wardrobe_trv"

    def test_invalid_climate_id(self):
        with pytest.raises(ConfigurationError):
            RoomClimate("Lounge", DirectClimateRef("TRV", "lounge_trv"))

    def test_unnamed_room_rejected(self):
        with pytest.raises(ConfigurationError):
            RoomClimate("--", DirectClimateRef("TRV", "climate.trv"))


class TestBoilerTopology:
    """Tests for building topologies."""

    def test_add_room_climate_returns_new_topology(self, topology):
        """Test adding rooms never mutates the original topology."""
        lounge = RoomClimate("Lounge", DirectClimateRef("Lounge TRV", "climate.lounge"))
        updated = topology.add_room_climate(lounge)

        assert topology.rooms == ()
        assert updated.rooms == (lounge,)

    def test_order_preserved(self, topology):
        lounge = RoomClimate("Lounge", DirectClimateRef("TRV", "climate.lounge"))
        kitchen = RoomClimate("Kitchen", DirectClimateRef("TRV", "climate.kitchen"))
        updated = topology.add_room_climate(lounge).add_room_climate(kitchen)

        assert [rc.room for rc in updated.rooms] == ["Lounge", "Kitchen"]

    def test_computed_climates(self, topology):
        computed = ComputedClimate(
            name="Office electric",
            heater=ActuatorRef("switch.office_heater"),
            target_sensor=SensorRef("sensor.office_temperature"),
        )
        updated = topology.add_room_climate(
            RoomClimate("Lounge", DirectClimateRef("TRV", "climate.lounge")),
            RoomClimate("Office", computed),
        )
        assert updated.computed_climates == (computed,)


class TestTopologySerialization:
    """Tests for topology dict serialization."""

    def test_from_dict(self):
        data = {
            "actuator": "switch.boiler",
            "power_sensor": "sensor.boiler_power",
            "standby_range": [130, 200],
            "rooms": [
                {
                    "room": "Lounge",
                    "climate": {"name": "Lounge TRV", "climate_id": "climate.lounge"},
                },
                {
                    "room": "Office",
                    "climate": {
                        "kind": "computed",
                        "name": "Office electric",
                        "heater": "switch.office_heater",
                        "target_sensor": "sensor.office_temperature",
                    },
                },
            ],
        }

        topology = BoilerTopology.from_dict(data)

        assert topology.actuator.entity_id == "switch.boiler"
        assert topology.standby_range == PowerRange(130.0, 200.0)
        assert isinstance(topology.rooms[0].source, DirectClimateRef)
        assert isinstance(topology.rooms[1].source, ComputedClimate)
        assert topology.rooms[1].target.climate_id == "climate.office_electric"

    def test_roundtrip(self, topology):
        original = topology.add_room_climate(
            RoomClimate("Lounge", DirectClimateRef("Lounge TRV", "climate.lounge")),
            RoomClimate(
                "Office",
                ComputedClimate(
                    name="Office electric",
                    heater=ActuatorRef("switch.office_heater"),
                    target_sensor=SensorRef("sensor.office_temperature"),
                ),
            ),
        )

        restored = BoilerTopology.from_dict(original.to_dict())

        assert restored == original

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="actuator"):
            BoilerTopology.from_dict(
                {"power_sensor": "sensor.power", "standby_range": [1, 2]}
            )

    def test_malformed_range(self):
        with pytest.raises(ConfigurationError):
            BoilerTopology.from_dict(
                {
                    "actuator": "switch.boiler",
                    "power_sensor": "sensor.power",
                    "standby_range": [1, 2, 3],
                }
            )

    def test_unknown_climate_kind(self):
        with pytest.raises(ConfigurationError, match="Unknown climate kind"):
            BoilerTopology.from_dict(
                {
                    "actuator": "switch.boiler",
                    "power_sensor": "sensor.power",
                    "standby_range": [1, 2],
                    "rooms": [{"room": "Lounge", "climate": {"kind": "magic", "name": "x"}}],
                }
            )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"actuator": 123},
            {"power_sensor": None},
            {"rooms": [{"room": "Lounge", "climate": "climate.lounge"}]},
            {"rooms": [{"room": "Lounge", "climate": ["climate.lounge"]}]},
            {"rooms": ["Lounge"]},
        ],
    )
    def test_wrong_value_types(self, overrides):
        data = {
            "actuator": "switch.boiler",
            "power_sensor": "sensor.power",
            "standby_range": [1, 2],
            **overrides,
        }
        with pytest.raises(ConfigurationError):
            BoilerTopology.from_dict(data)

    def test_null_rooms_is_empty(self):
        """Test a rooms key left empty in YAML (None) means no rooms."""
        topology = BoilerTopology.from_dict(
            {
                "actuator": "switch.boiler",
                "power_sensor": "sensor.power",
                "standby_range": [1, 2],
                "rooms": None,
            }
        )

        assert topology.rooms == ()
