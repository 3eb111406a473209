"""
Boiler compiler.

Runs the full pipeline for one topology: derived signals, boiler rules,
and the presentation bundle. Either the whole result is produced or an
error is raised; nothing is partially emitted.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from heating_topology.config import CompilerConfig
from heating_topology.core.topology import BoilerTopology
from heating_topology.modules.automation.models import AutomationRule

from .presentation import PresentationBundle, PresentationProjector
from .rules import compile_boiler_rules
from .signals import CompiledSignals, SignalCompiler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilationResult:
    """Output of one compilation run."""

    topology: BoilerTopology
    signals: CompiledSignals
    turn_on: AutomationRule
    turn_off: AutomationRule
    presentation: PresentationBundle

    @property
    def rules(self) -> Tuple[AutomationRule, AutomationRule]:
        return self.turn_on, self.turn_off

    def backend_package(self) -> Dict[str, Any]:
        """
        Signal/rule bundle in the rule runtime's package format.

        Template sensors keep the order: classifier, aggregate, then
        per-room heat-needed and temperature-difference signals in
        topology order.
        """
        package: Dict[str, Any] = {
            "sensor": [self.signals.burning_today.to_platform_config()],
            "template": [
                {"sensor": [s.to_platform_config() for s in self.signals.template_signals()]}
            ],
            "automation": [
                self.turn_off.to_automation(),
                self.turn_on.to_automation(),
            ],
        }
        computed = self.topology.computed_climates
        if computed:
            package["climate"] = [c.to_platform_config() for c in computed]
        return package

    def frontend(self) -> Dict[str, Any]:
        """Presentation bundle in the dashboard card format."""
        return self.presentation.to_dict()


class BoilerCompiler:
    """
    Compiles a BoilerTopology into signals, rules, and presentation.

    Stateless between runs: compiling the same topology twice yields equal
    results.
    """

    def __init__(self, topology: BoilerTopology, config: Optional[CompilerConfig] = None) -> None:
        self._topology = topology
        self._config = config or CompilerConfig()

    def compile(self) -> CompilationResult:
        """
        Compile the topology.

        Raises:
            ConfigurationError: If the topology has no room climates
            IdentifierCollisionError: If two rooms derive the same identifier
        """
        config = self._config
        signals = SignalCompiler(on_time_window_hours=config.on_time_window_hours).compile(
            self._topology
        )
        turn_on, turn_off = compile_boiler_rules(
            signals.requesting_heat,
            self._topology.actuator,
            dwell_minutes=config.dwell_minutes,
        )
        presentation = PresentationProjector(
            hours_to_show=config.graph_hours_to_show,
            points_per_hour=config.graph_points_per_hour,
        ).project(signals, self._topology.actuator)

        logger.info(
            f"Compiled boiler {self._topology.actuator.entity_id}: "
            f"{len(signals.all())} signals, 2 rules, {len(self._topology.rooms)} rooms"
        )
        return CompilationResult(
            topology=self._topology,
            signals=signals,
            turn_on=turn_on,
            turn_off=turn_off,
            presentation=presentation,
        )
