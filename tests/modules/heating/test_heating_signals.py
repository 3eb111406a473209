"""Tests for the derived signal compiler."""

import pytest

from heating_topology import (
    ActuatorRef,
    BoilerTopology,
    ComputedClimate,
    DirectClimateRef,
    IdentifierCollisionError,
    PowerRange,
    RoomClimate,
    SensorRef,
)
from heating_topology.modules.heating import (
    HistoryStatsSignal,
    SignalCompiler,
    TemplateSignal,
)


@pytest.fixture
def boiler():
    """Create a boiler topology without rooms."""
    return BoilerTopology(
        actuator=ActuatorRef("switch.boiler"),
        power_sensor=SensorRef("sensor.boiler_power"),
        standby_range=PowerRange(130, 200),
    )


@pytest.fixture
def topology(boiler):
    """Create a two-room topology (Lounge, Kitchen)."""
    return boiler.add_room_climate(
        RoomClimate("Lounge", DirectClimateRef("Lounge TRV", "climate.lounge_trv")),
        RoomClimate("Kitchen", DirectClimateRef("Kitchen TRV", "climate.kitchen_trv")),
    )


class TestBurningStateSignal:
    """Tests for the burning-state classifier signal."""

    def test_identifier(self, topology):
        signal = SignalCompiler().compile(topology).burning_state
        assert signal.entity_id == "sensor.boiler_burning_state"
        assert signal.unique_id == "boiler_burning_state"
        assert signal.name == "Boiler Burning State"

    def test_check_order(self, topology):
        """Test switch-off is checked first and the mid band is the else branch."""
        state = SignalCompiler().compile(topology).burning_state.state
        assert state.splitlines() == [
            "{% if is_state('switch.boiler', 'off') %}",
            "  off",
            "{% elif states('sensor.boiler_power') | float < 130 %}",
            "  standby",
            "{% elif states('sensor.boiler_power') | float > 200 %}",
            "  on",
            "{% else %}",
            "  failed",
            "{% endif %}",
        ]


class TestBurningTodaySignal:
    """Tests for the daily on-time aggregator."""

    def test_tracks_classifier_on_state(self, topology):
        signal = SignalCompiler().compile(topology).burning_today

        assert isinstance(signal, HistoryStatsSignal)
        assert signal.entity_id == "sensor.boiler_burning_today"
        assert signal.source_entity_id == "sensor.boiler_burning_state"
        assert signal.state == "on"
        assert signal.type == "time"
        assert signal.end == "{{ now() }}"
        assert signal.start == "{{ now() - timedelta(hours=24) }}"

    def test_custom_window(self, topology):
        signal = SignalCompiler(on_time_window_hours=12).compile(topology).burning_today
        assert signal.start == "{{ now() - timedelta(hours=12) }}"

    def test_platform_config(self, topology):
        config = SignalCompiler().compile(topology).burning_today.to_platform_config()
        assert config["platform"] == "history_stats"
        assert config["entity_id"] == "sensor.boiler_burning_state"


class TestPerRoomSignals:
    """Tests for heat-needed and temperature-difference signals."""

    def test_heat_needed_identifiers(self, topology):
        signals = SignalCompiler().compile(topology)
        assert [s.entity_id for s in signals.heat_needed] == [
            "sensor.lounge_lounge_trv_heat_needed",
            "sensor.kitchen_kitchen_trv_heat_needed",
        ]

    def test_heat_needed_expression(self, topology):
        signal = SignalCompiler().compile(topology).heat_needed[0]
        assert signal.name == "Lounge Lounge trv Heat Needed"
        assert signal.state == (
            "{{ state_attr('climate.lounge_trv', 'current_temperature') < "
            "state_attr('climate.lounge_trv', 'temperature') and "
            "state_attr('climate.lounge_trv', 'hvac_action') != \"off\" }}"
        )

    def test_custom_attributes(self, boiler):
        topology = boiler.add_room_climate(
            RoomClimate(
                "Spare Bedroom",
                DirectClimateRef(
                    "Spare bedroom TRV",
                    "climate.trv_7",
                    temperature_attribute="local_temperature",
                    setpoint_attribute="current_heating_setpoint",
                    heat_mode_attribute="system_mode",
                ),
            )
        )
        signal = SignalCompiler().compile(topology).heat_needed[0]

        assert signal.entity_id == "sensor.spare_bedroom_spare_bedroom_trv_heat_needed"
        assert "'local_temperature'" in signal.state
        assert "'current_heating_setpoint'" in signal.state
        assert "'system_mode'" in signal.state

    def test_temp_diff(self, topology):
        signal = SignalCompiler().compile(topology).temp_diff[1]
        assert signal.entity_id == "sensor.kitchen_kitchen_trv_temp_diff"
        assert signal.name == "Kitchen Kitchen trv Temp Diff"
        assert signal.state == (
            "{{ (state_attr('climate.kitchen_trv', 'current_temperature') | float) - "
            "(state_attr('climate.kitchen_trv', 'temperature') | float) }}"
        )


class TestRequestingHeatSignal:
    """Tests for the aggregate requesting-heat count."""

    def test_counts_heat_needed_signals(self, topology):
        signal = SignalCompiler().compile(topology).requesting_heat

        assert signal.entity_id == "sensor.radiators_requesting_heat"
        assert signal.sources == (
            "sensor.lounge_lounge_trv_heat_needed",
            "sensor.kitchen_kitchen_trv_heat_needed",
        )
        assert signal.state == (
            "{{ [ 'sensor.lounge_lounge_trv_heat_needed', "
            "'sensor.kitchen_kitchen_trv_heat_needed' ] "
            "| select('is_state', 'True') | list | length }}"
        )

    def test_fixed_identifier_regardless_of_room_count(self, boiler, topology):
        one_room = boiler.add_room_climate(topology.rooms[0])
        assert (
            SignalCompiler().compile(one_room).requesting_heat.entity_id
            == SignalCompiler().compile(topology).requesting_heat.entity_id
        )

    def test_zero_rooms_is_constant_zero(self, boiler):
        """Test a topology without rooms compiles to a constant zero aggregate."""
        signals = SignalCompiler().compile(boiler)

        assert signals.requesting_heat.state == "{{ 0 }}"
        assert signals.requesting_heat.sources == ()
        assert signals.heat_needed == ()


class TestCompiledSignals:
    """Tests for the compiled signal set."""

    def test_output_order(self, topology):
        signals = SignalCompiler().compile(topology)
        assert [s.unique_id for s in signals.all()] == [
            "boiler_burning_state",
            "boiler_burning_today",
            "radiators_requesting_heat",
            "lounge_lounge_trv_heat_needed",
            "kitchen_kitchen_trv_heat_needed",
            "lounge_lounge_trv_temp_diff",
            "kitchen_kitchen_trv_temp_diff",
        ]

    def test_identifiers_unique(self, topology):
        ids = [s.entity_id for s in SignalCompiler().compile(topology).all()]
        assert len(ids) == len(set(ids))

    def test_template_signals_exclude_history_stats(self, topology):
        signals = SignalCompiler().compile(topology).template_signals()
        assert all(isinstance(s, TemplateSignal) for s in signals)
        assert len(signals) == 6

    def test_get(self, topology):
        signals = SignalCompiler().compile(topology)
        assert signals.get("sensor.radiators_requesting_heat") is signals.requesting_heat
        assert signals.get("sensor.nope") is None

    def test_deterministic(self, topology):
        """Test compiling twice yields equal output."""
        assert SignalCompiler().compile(topology) == SignalCompiler().compile(topology)


class TestIdentifierCollisions:
    """Tests for identifier collision detection."""

    def test_duplicate_room_climate(self, boiler):
        climate = DirectClimateRef("TRV", "climate.lounge")
        topology = boiler.add_room_climate(
            RoomClimate("Lounge", climate),
            RoomClimate("Lounge", DirectClimateRef("TRV", "climate.lounge_other")),
        )
        with pytest.raises(IdentifierCollisionError) as exc_info:
            SignalCompiler().compile(topology)

        assert exc_info.value.entity_id == "sensor.lounge_trv_heat_needed"

    def test_composed_slug_collision(self, boiler):
        """Test distinct (room, climate) pairs that compose the same slug."""
        topology = boiler.add_room_climate(
            RoomClimate("Lounge", DirectClimateRef("Kitchen TRV", "climate.a")),
            RoomClimate("Lounge Kitchen", DirectClimateRef("TRV", "climate.b")),
        )
        with pytest.raises(IdentifierCollisionError, match="lounge_kitchen_trv_heat_needed"):
            SignalCompiler().compile(topology)

    def test_duplicate_computed_climate(self, boiler):
        """Test two computed climates deriving the same climate entity."""
        topology = boiler.add_room_climate(
            RoomClimate(
                "Lounge",
                ComputedClimate(
                    "Electric",
                    heater=ActuatorRef("switch.lounge_heater"),
                    target_sensor=SensorRef("sensor.lounge_temperature"),
                ),
            ),
            RoomClimate(
                "Office",
                ComputedClimate(
                    "Electric",
                    heater=ActuatorRef("switch.office_heater"),
                    target_sensor=SensorRef("sensor.office_temperature"),
                ),
            ),
        )
        with pytest.raises(IdentifierCollisionError) as exc_info:
            SignalCompiler().compile(topology)

        assert exc_info.value.entity_id == "climate.electric"
        assert exc_info.value.first == "Lounge / Electric"
        assert exc_info.value.second == "Office / Electric"

    def test_distinct_computed_climates(self, boiler):
        topology = boiler.add_room_climate(
            RoomClimate(
                "Lounge",
                ComputedClimate(
                    "Lounge electric",
                    heater=ActuatorRef("switch.lounge_heater"),
                    target_sensor=SensorRef("sensor.lounge_temperature"),
                ),
            ),
            RoomClimate(
                "Office",
                ComputedClimate(
                    "Office electric",
                    heater=ActuatorRef("switch.office_heater"),
                    target_sensor=SensorRef("sensor.office_temperature"),
                ),
            ),
        )

        signals = SignalCompiler().compile(topology)

        assert len(signals.heat_needed) == 2
