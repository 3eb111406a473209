"""
heating-topology: compiles a declarative boiler topology into a control layer.

This library turns a small description of a boiler and its rooms into:
- Derived signals (burning state, daily on-time, per-room heat demand)
- A debounced pair of boiler on/off automation rules
- A dashboard presentation bundle referencing those signals
"""

from heating_topology.core.topology import (
    ActuatorRef,
    SensorRef,
    PowerRange,
    ClimateTarget,
    DirectClimateRef,
    ComputedClimate,
    RoomClimate,
    BoilerTopology,
)
from heating_topology.config import CompilerConfig, load_topology, dump_yaml
from heating_topology.exceptions import (
    HeatingTopologyError,
    ConfigurationError,
    IdentifierCollisionError,
)
from heating_topology.modules.heating import BoilerCompiler, CompilationResult

__version__ = "0.1.0"

__all__ = [
    "ActuatorRef",
    "SensorRef",
    "PowerRange",
    "ClimateTarget",
    "DirectClimateRef",
    "ComputedClimate",
    "RoomClimate",
    "BoilerTopology",
    "CompilerConfig",
    "load_topology",
    "dump_yaml",
    "HeatingTopologyError",
    "ConfigurationError",
    "IdentifierCollisionError",
    "BoilerCompiler",
    "CompilationResult",
]
