"""
Data models for declarative automation rules.

Defines triggers, conditions, and actions. Rules are descriptions only:
they serialize to the automation format consumed by the rule runtime
(to_automation) and to a lossless storage format (to_dict/from_dict).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from heating_topology.core.expressions import (
    format_number,
    render_dwell_guard,
    render_states,
)
from heating_topology.exceptions import ConfigurationError


# =============================================================================
# Enums
# =============================================================================


class TriggerType(Enum):
    """Types of triggers that can activate a rule."""

    STATE = "state"  # Entity state change


class ConditionType(Enum):
    """Types of conditions that must be met for actions to execute."""

    NUMERIC_COMPARE = "numeric_compare"  # Entity state compared to a number
    DWELL_TIME = "dwell_time"  # Entity held its state for N minutes


class ComparisonOperator(Enum):
    """Comparison used by NumericCompareCondition."""

    GT = ">"
    LT = "<"
    EQ = "=="


class ActionType(Enum):
    """Types of actions that can be executed."""

    SERVICE_CALL = "service_call"  # Platform service call


class ExecutionMode(Enum):
    """How the runtime handles a rule re-triggering while running."""

    SINGLE = "single"  # Ignore new triggers while running
    RESTART = "restart"  # Cancel previous, start new
    QUEUED = "queued"  # Run after the current run
    PARALLEL = "parallel"  # Allow multiple simultaneous


# =============================================================================
# Trigger Configs
# =============================================================================


@dataclass(frozen=True)
class StateTriggerConfig:
    """Trigger on entity state changes (any change when to/from are unset)."""

    entity_id: str
    to_state: Optional[str] = None
    from_state: Optional[str] = None

    @property
    def trigger_type(self) -> TriggerType:
        return TriggerType.STATE

    def to_automation(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"platform": "state", "entity_id": self.entity_id}
        if self.from_state is not None:
            result["from"] = self.from_state
        if self.to_state is not None:
            result["to"] = self.to_state
        return result


TriggerConfig = StateTriggerConfig


# =============================================================================
# Condition Configs
# =============================================================================


@dataclass(frozen=True)
class NumericCompareCondition:
    """Check an entity's numeric state against a value."""

    entity_id: str
    operator: ComparisonOperator
    value: float = 0

    @property
    def condition_type(self) -> ConditionType:
        return ConditionType.NUMERIC_COMPARE

    def render(self) -> str:
        return (
            f"{{{{ {render_states(self.entity_id)} | float "
            f"{self.operator.value} {format_number(self.value)} }}}}"
        )

    def to_automation(self) -> Dict[str, Any]:
        return {"condition": "template", "value_template": self.render()}


@dataclass(frozen=True)
class DwellTimeCondition:
    """
    Check that an entity has held its state for longer than N minutes.

    Elapsed time is measured from the entity's own last_changed timestamp
    and truncated to whole minutes before comparing.
    """

    entity_id: str
    minutes: int = 5

    @property
    def condition_type(self) -> ConditionType:
        return ConditionType.DWELL_TIME

    def render(self) -> str:
        return render_dwell_guard(self.entity_id, self.minutes)

    def to_automation(self) -> Dict[str, Any]:
        return {"condition": "template", "value_template": self.render()}


ConditionConfig = NumericCompareCondition | DwellTimeCondition


# =============================================================================
# Action Configs
# =============================================================================


@dataclass(frozen=True)
class ServiceCallAction:
    """Execute a platform service call (e.g., switch.turn_on)."""

    service: str  # e.g., "switch.turn_on"
    entity_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def action_type(self) -> ActionType:
        return ActionType.SERVICE_CALL

    def to_automation(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"service": self.service}
        if self.entity_id:
            result["target"] = {"entity_id": self.entity_id}
        if self.data:
            result["data"] = dict(self.data)
        return result


ActionConfig = ServiceCallAction


# =============================================================================
# Automation Rule
# =============================================================================


@dataclass(frozen=True)
class AutomationRule:
    """A declarative automation rule.

    Consists of:
    - alias: Human-readable name shown by the runtime
    - trigger: What state change activates the rule
    - conditions: All must be true for actions to run
    - actions: What to execute when triggered
    - mode: How the runtime handles concurrent triggers
    """

    alias: str
    trigger: TriggerConfig
    conditions: Tuple[ConditionConfig, ...]
    actions: Tuple[ActionConfig, ...]
    mode: ExecutionMode = ExecutionMode.SINGLE

    def to_automation(self) -> Dict[str, Any]:
        """Serialize to the rule runtime's automation format."""
        return {
            "alias": self.alias,
            "trigger": [self.trigger.to_automation()],
            "condition": [c.to_automation() for c in self.conditions],
            "action": [a.to_automation() for a in self.actions],
            "mode": self.mode.value,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for storage/transport."""
        return {
            "alias": self.alias,
            "trigger": {
                "type": "state",
                "entity_id": self.trigger.entity_id,
                "to_state": self.trigger.to_state,
                "from_state": self.trigger.from_state,
            },
            "conditions": [self._serialize_condition(c) for c in self.conditions],
            "actions": [
                {
                    "type": "service_call",
                    "service": a.service,
                    "entity_id": a.entity_id,
                    "data": dict(a.data),
                }
                for a in self.actions
            ],
            "mode": self.mode.value,
        }

    def _serialize_condition(self, c: ConditionConfig) -> Dict[str, Any]:
        """Serialize condition config."""
        if isinstance(c, NumericCompareCondition):
            return {
                "type": "numeric_compare",
                "entity_id": c.entity_id,
                "operator": c.operator.value,
                "value": c.value,
            }
        elif isinstance(c, DwellTimeCondition):
            return {"type": "dwell_time", "entity_id": c.entity_id, "minutes": c.minutes}
        return {}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AutomationRule":
        """
        Deserialize from dict.

        Raises:
            ConfigurationError: On unknown types or missing keys
        """
        try:
            return cls(
                alias=data["alias"],
                trigger=cls._parse_trigger(data["trigger"]),
                conditions=tuple(cls._parse_condition(c) for c in data.get("conditions", [])),
                actions=tuple(cls._parse_action(a) for a in data.get("actions", [])),
                mode=ExecutionMode(data.get("mode", "single")),
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing rule key: {e.args[0]}") from e
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @staticmethod
    def _parse_trigger(data: Dict[str, Any]) -> TriggerConfig:
        """Parse trigger config from dict."""
        trigger_type = data.get("type", "state")

        if trigger_type == "state":
            return StateTriggerConfig(
                entity_id=data["entity_id"],
                to_state=data.get("to_state"),
                from_state=data.get("from_state"),
            )
        else:
            raise ConfigurationError(f"Unknown trigger type: {trigger_type}")

    @staticmethod
    def _parse_condition(data: Dict[str, Any]) -> ConditionConfig:
        """Parse condition config from dict."""
        condition_type = data["type"]

        if condition_type == "numeric_compare":
            return NumericCompareCondition(
                entity_id=data["entity_id"],
                operator=ComparisonOperator(data["operator"]),
                value=data.get("value", 0),
            )
        elif condition_type == "dwell_time":
            return DwellTimeCondition(
                entity_id=data["entity_id"],
                minutes=data.get("minutes", 5),
            )
        else:
            raise ConfigurationError(f"Unknown condition type: {condition_type}")

    @staticmethod
    def _parse_action(data: Dict[str, Any]) -> ActionConfig:
        """Parse action config from dict."""
        action_type = data.get("type", "service_call")

        if action_type == "service_call":
            return ServiceCallAction(
                service=data["service"],
                entity_id=data.get("entity_id"),
                data=data.get("data", {}),
            )
        else:
            raise ConfigurationError(f"Unknown action type: {action_type}")
