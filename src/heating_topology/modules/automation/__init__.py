"""
Declarative automation rules for heating-topology.

Provides rule models with triggers, conditions, and actions. Rules are
compiled descriptions handed to an external rule runtime; this package
never executes them.

Features:
- State triggers
- Numeric comparison and dwell-time conditions
- Service call actions
- Serialization to the runtime automation format and to storage dicts
- Reference condition evaluation against a platform state snapshot

Architecture:
    Domain modules (heating/) build on these models to emit
    domain-specific rules.

    ┌─────────────────────────────────────────────┐
    │          Domain Modules (heating)           │
    │                     │                       │
    │                     ▼                       │
    │          ┌─────────────────────┐            │
    │          │   Automation Models │            │
    │          └─────────────────────┘            │
    └─────────────────────────────────────────────┘
"""

from .models import (
    # Enums
    TriggerType,
    ConditionType,
    ComparisonOperator,
    ActionType,
    ExecutionMode,
    # Triggers
    StateTriggerConfig,
    TriggerConfig,
    # Conditions
    NumericCompareCondition,
    DwellTimeCondition,
    ConditionConfig,
    # Actions
    ServiceCallAction,
    ActionConfig,
    # Rule
    AutomationRule,
)
from .adapter import PlatformAdapter, MockPlatformAdapter
from .evaluators import ConditionEvaluator
from .presets import switch_on_when_demanded, switch_off_when_satisfied

__all__ = [
    # Adapter
    "PlatformAdapter",
    "MockPlatformAdapter",
    # Evaluators
    "ConditionEvaluator",
    # Enums
    "TriggerType",
    "ConditionType",
    "ComparisonOperator",
    "ActionType",
    "ExecutionMode",
    # Triggers
    "StateTriggerConfig",
    "TriggerConfig",
    # Conditions
    "NumericCompareCondition",
    "DwellTimeCondition",
    "ConditionConfig",
    # Actions
    "ServiceCallAction",
    "ActionConfig",
    # Rule
    "AutomationRule",
    # Generic presets
    "switch_on_when_demanded",
    "switch_off_when_satisfied",
]
