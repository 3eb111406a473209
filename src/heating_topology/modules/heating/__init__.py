"""
Heating module for heating-topology.

Compiles a boiler topology into its control layer.

This module builds on the automation models to provide:
- Derived signals: burning-state classifier, daily on-time, per-room
  heat-needed and temperature difference, rooms requesting heat
- Boiler on/off rules guarded by a dwell time
- A dashboard presentation bundle

Architecture:
    BoilerTopology
        │
        ▼
    SignalCompiler ──► compile_boiler_rules   (signal/rule bundle)
        │
        └─────────► PresentationProjector  (dashboard bundle)
"""

from .models import BurningState, TemplateSignal, HistoryStatsSignal, DerivedSignal
from .signals import SignalCompiler, CompiledSignals
from .rules import (
    compile_boiler_rules,
    boiler_on_when_heat_needed,
    boiler_off_when_satisfied,
)
from .presentation import (
    PresentationProjector,
    PresentationBundle,
    MiniGraphCard,
    EntityRowCard,
)
from .evaluators import (
    SignalEvaluator,
    classify_burning_state,
    heat_needed,
    count_requesting_heat,
    on_time_in_window,
)
from .compiler import BoilerCompiler, CompilationResult

__all__ = [
    # Models
    "BurningState",
    "TemplateSignal",
    "HistoryStatsSignal",
    "DerivedSignal",
    # Compilers
    "SignalCompiler",
    "CompiledSignals",
    "compile_boiler_rules",
    "boiler_on_when_heat_needed",
    "boiler_off_when_satisfied",
    "PresentationProjector",
    "PresentationBundle",
    "MiniGraphCard",
    "EntityRowCard",
    "BoilerCompiler",
    "CompilationResult",
    # Evaluators
    "SignalEvaluator",
    "classify_burning_state",
    "heat_needed",
    "count_requesting_heat",
    "on_time_in_window",
]
