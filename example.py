#!/usr/bin/env python3
"""
Quick example demonstrating heating-topology basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

from datetime import datetime, timedelta, UTC

from heating_topology import (
    ActuatorRef,
    BoilerCompiler,
    BoilerTopology,
    ComputedClimate,
    DirectClimateRef,
    PowerRange,
    RoomClimate,
    SensorRef,
    dump_yaml,
)
from heating_topology.modules.automation import ConditionEvaluator, MockPlatformAdapter
from heating_topology.modules.heating import SignalEvaluator

print("=" * 60)
print("heating-topology Example")
print("=" * 60)

# 1. Describe the boiler
print("\n1. Building topology...")
topology = BoilerTopology(
    actuator=ActuatorRef("switch.legrand_connected_outlet_switch_4"),
    power_sensor=SensorRef("sensor.legrand_connected_outlet_active_power_4"),
    standby_range=PowerRange(130, 200),
).add_room_climate(
    RoomClimate(
        "Lounge",
        DirectClimateRef("Lounge corner TRV", "climate.tze200_6rdj8dzm_ts0601_thermostat_2"),
    ),
    RoomClimate(
        "Kitchen",
        DirectClimateRef("Kitchen door TRV", "climate.tze200_6rdj8dzm_ts0601_thermostat_4"),
    ),
    RoomClimate(
        "End Bedroom",
        ComputedClimate(
            name="End bedroom electric",
            heater=ActuatorRef("switch.0x04cf8cdf3c89dcdd"),
            target_sensor=SensorRef("sensor.0xa4c138bf686fe61c_temperature"),
        ),
    ),
)
for rc in topology.rooms:
    print(f"   ✓ {rc.room}: {rc.target.climate_id} ({rc.source.kind})")

# 2. Compile
print("\n2. Compiling...")
result = BoilerCompiler(topology).compile()
for signal in result.signals.all():
    print(f"   ✓ {signal.entity_id}")
for rule in result.rules:
    print(f"   ✓ rule: {rule.alias}")

# 3. Check the compiled control layer against a sample state
print("\n3. Evaluating against a sample state...")
now = datetime.now(UTC)
platform = MockPlatformAdapter()
platform.set_current_time(now)
platform.set_state("switch.legrand_connected_outlet_switch_4", "off", changed_at=now - timedelta(minutes=30))
platform.set_state("sensor.legrand_connected_outlet_active_power_4", 0)
for rc, current in zip(topology.rooms, (18.0, 21.5, 16.0)):
    platform.set_attribute(rc.target.climate_id, rc.target.temperature_attribute, current)
    platform.set_attribute(rc.target.climate_id, rc.target.setpoint_attribute, 20.0)
    platform.set_attribute(rc.target.climate_id, rc.target.heat_mode_attribute, "heating")

signals = SignalEvaluator(platform, topology, result.signals)
demand = signals.evaluate(result.signals.requesting_heat)
platform.set_state(result.signals.requesting_heat.entity_id, demand)
print(f"   ✓ Burning state: {signals.evaluate(result.signals.burning_state).value}")
print(f"   ✓ Rooms requesting heat: {demand}")

conditions = ConditionEvaluator(platform)
for rule in result.rules:
    print(f"   ✓ {rule.alias}: {'fires' if conditions.evaluate_all(rule.conditions) else 'idle'}")

# 4. Emit the bundles
print("\n4. Backend package:")
print(dump_yaml(result.backend_package()))
print("5. Frontend card:")
print(dump_yaml(result.frontend()))

print("=" * 60)
print("Example complete!")
print("=" * 60)
