"""
Boiler rule compiler.

Builds the linked pair of boiler rules from the aggregate demand signal:
turn the boiler on while any room requests heat, off once none do.
"""

import logging
from typing import Tuple

from heating_topology.core.topology import ActuatorRef
from heating_topology.exceptions import ConfigurationError
from heating_topology.modules.automation.models import AutomationRule
from heating_topology.modules.automation.presets import (
    switch_off_when_satisfied,
    switch_on_when_demanded,
)

from .models import TemplateSignal

logger = logging.getLogger(__name__)

TURN_ON_ALIAS = "Turn on boiler when heat needed"
TURN_OFF_ALIAS = "Turn off boiler when all rads satisfied"


def boiler_on_when_heat_needed(
    aggregate_signal: TemplateSignal,
    actuator: ActuatorRef,
    *,
    dwell_minutes: int = 5,
) -> AutomationRule:
    """Rule turning the boiler on when at least one room needs heat."""
    return switch_on_when_demanded(
        TURN_ON_ALIAS,
        aggregate_signal.entity_id,
        actuator.entity_id,
        dwell_minutes=dwell_minutes,
    )


def boiler_off_when_satisfied(
    aggregate_signal: TemplateSignal,
    actuator: ActuatorRef,
    *,
    dwell_minutes: int = 5,
) -> AutomationRule:
    """Rule turning the boiler off when no room needs heat."""
    return switch_off_when_satisfied(
        TURN_OFF_ALIAS,
        aggregate_signal.entity_id,
        actuator.entity_id,
        dwell_minutes=dwell_minutes,
    )


def compile_boiler_rules(
    aggregate_signal: TemplateSignal,
    actuator: ActuatorRef,
    *,
    dwell_minutes: int = 5,
) -> Tuple[AutomationRule, AutomationRule]:
    """
    Compile the turn-on and turn-off rules for one boiler.

    Both rules trigger on the same aggregate signal, act on the same
    actuator, and share the dwell guard.

    Args:
        aggregate_signal: Count of rooms requesting heat
        actuator: Boiler switch
        dwell_minutes: Minimum whole minutes between toggles

    Returns:
        (turn_on, turn_off)

    Raises:
        ConfigurationError: If no room contributes to the aggregate signal
    """
    if not aggregate_signal.sources:
        raise ConfigurationError(
            f"{aggregate_signal.entity_id} has no contributing rooms; "
            "add at least one room climate before compiling boiler rules"
        )

    turn_on = boiler_on_when_heat_needed(
        aggregate_signal, actuator, dwell_minutes=dwell_minutes
    )
    turn_off = boiler_off_when_satisfied(
        aggregate_signal, actuator, dwell_minutes=dwell_minutes
    )
    logger.debug(
        f"Compiled boiler rules for {actuator.entity_id} "
        f"({len(aggregate_signal.sources)} sources, dwell {dwell_minutes} min)"
    )
    return turn_on, turn_off
