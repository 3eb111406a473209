"""
Configuration for heating-topology.

CompilerConfig holds the tunables of a compilation run. load_topology and
dump_yaml are the YAML seams used by the host tooling that reads topology
files and writes the generated bundles.
"""

import logging
from dataclasses import dataclass
from typing import IO, Any, Dict, Union

import yaml

from heating_topology.core.topology import BoilerTopology
from heating_topology.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerConfig:
    """
    Tunables for one compilation run.

    Attributes:
        dwell_minutes: Minimum whole minutes the boiler switch must hold its
            state before either rule may toggle it
        on_time_window_hours: Trailing window of the daily on-time aggregator
        graph_hours_to_show: History shown in the burning-state graph
        graph_points_per_hour: Graph resolution
    """

    version: int = 1
    dwell_minutes: int = 5
    on_time_window_hours: int = 24
    graph_hours_to_show: int = 3
    graph_points_per_hour: int = 60

    def __post_init__(self) -> None:
        if self.dwell_minutes < 0:
            raise ConfigurationError(f"dwell_minutes must be >= 0, got {self.dwell_minutes}")
        for name in ("on_time_window_hours", "graph_hours_to_show", "graph_points_per_hour"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {getattr(self, name)}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "version": self.version,
            "dwell_minutes": self.dwell_minutes,
            "on_time_window_hours": self.on_time_window_hours,
            "graph_hours_to_show": self.graph_hours_to_show,
            "graph_points_per_hour": self.graph_points_per_hour,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompilerConfig":
        """Deserialize from dict."""
        return cls(
            version=data.get("version", 1),
            dwell_minutes=data.get("dwell_minutes", 5),
            on_time_window_hours=data.get("on_time_window_hours", 24),
            graph_hours_to_show=data.get("graph_hours_to_show", 3),
            graph_points_per_hour=data.get("graph_points_per_hour", 60),
        )


def load_topology(stream: Union[str, IO[str]]) -> BoilerTopology:
    """
    Parse a YAML topology description.

    Args:
        stream: YAML text or an open text stream

    Raises:
        ConfigurationError: If the YAML is invalid or not a topology mapping
    """
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid topology YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Topology YAML must be a mapping")

    topology = BoilerTopology.from_dict(data)
    logger.debug(f"Loaded topology with {len(topology.rooms)} room climates")
    return topology


class _BundleDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line templates as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BundleDumper.add_representer(str, _represent_str)


def dump_yaml(data: Any) -> str:
    """Serialize a generated bundle to YAML, preserving key order."""
    return yaml.dump(
        data,
        Dumper=_BundleDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
