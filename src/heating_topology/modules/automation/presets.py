"""
Generic automation presets - demand-driven switch rules.

Each preset toggles a switch-like actuator when a demand count entity
changes, guarded by a dwell time on the actuator so that a flapping count
cannot cycle the device faster than once per dwell period. The on and off
presets use complementary count conditions (> 0 and == 0), so for the same
state at most one of them can fire.
"""

from .models import (
    AutomationRule,
    ComparisonOperator,
    DwellTimeCondition,
    ExecutionMode,
    NumericCompareCondition,
    ServiceCallAction,
    StateTriggerConfig,
)


def _service(entity_id: str, service: str) -> str:
    domain = entity_id.split(".", 1)[0]
    return f"{domain}.{service}"


def switch_on_when_demanded(
    alias: str,
    demand_entity: str,
    switch_entity: str,
    *,
    dwell_minutes: int = 5,
) -> AutomationRule:
    """
    Create a rule that turns a switch on when demand is above zero.

    Args:
        alias: Rule alias
        demand_entity: Numeric entity counting demand (e.g., rooms requesting heat)
        switch_entity: Switch to turn on
        dwell_minutes: Whole minutes the switch must hold its state first

    Returns:
        Configured AutomationRule

    Example:
        rule = switch_on_when_demanded(
            "Turn on boiler when heat needed",
            "sensor.radiators_requesting_heat",
            "switch.boiler",
        )
    """
    return AutomationRule(
        alias=alias,
        trigger=StateTriggerConfig(entity_id=demand_entity),
        conditions=(
            NumericCompareCondition(
                entity_id=demand_entity, operator=ComparisonOperator.GT, value=0
            ),
            DwellTimeCondition(entity_id=switch_entity, minutes=dwell_minutes),
        ),
        actions=(
            ServiceCallAction(
                service=_service(switch_entity, "turn_on"),
                entity_id=switch_entity,
            ),
        ),
        mode=ExecutionMode.SINGLE,
    )


def switch_off_when_satisfied(
    alias: str,
    demand_entity: str,
    switch_entity: str,
    *,
    dwell_minutes: int = 5,
) -> AutomationRule:
    """
    Create a rule that turns a switch off when demand drops to zero.

    Args:
        alias: Rule alias
        demand_entity: Numeric entity counting demand
        switch_entity: Switch to turn off
        dwell_minutes: Whole minutes the switch must hold its state first

    Returns:
        Configured AutomationRule
    """
    return AutomationRule(
        alias=alias,
        trigger=StateTriggerConfig(entity_id=demand_entity),
        conditions=(
            NumericCompareCondition(
                entity_id=demand_entity, operator=ComparisonOperator.EQ, value=0
            ),
            DwellTimeCondition(entity_id=switch_entity, minutes=dwell_minutes),
        ),
        actions=(
            ServiceCallAction(
                service=_service(switch_entity, "turn_off"),
                entity_id=switch_entity,
            ),
        ),
        mode=ExecutionMode.SINGLE,
    )
