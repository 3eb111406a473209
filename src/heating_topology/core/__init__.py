"""
Core components of heating-topology.

This package contains:
- topology: Boiler, sensor, and room climate models
- identifiers: Slug and label derivation
- expressions: Template expression rendering
"""

from heating_topology.core.topology import (
    ActuatorRef,
    SensorRef,
    PowerRange,
    ClimateTarget,
    DirectClimateRef,
    ComputedClimate,
    ClimateSource,
    RoomClimate,
    BoilerTopology,
)
from heating_topology.core.identifiers import derive_slug, derive_label
from heating_topology.core.expressions import render_state_reference

__all__ = [
    "ActuatorRef",
    "SensorRef",
    "PowerRange",
    "ClimateTarget",
    "DirectClimateRef",
    "ComputedClimate",
    "ClimateSource",
    "RoomClimate",
    "BoilerTopology",
    "derive_slug",
    "derive_label",
    "render_state_reference",
]
