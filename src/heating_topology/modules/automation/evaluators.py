"""
Condition evaluators for automation rules.

Reference semantics for the rendered template conditions: each evaluator
answers what the rule runtime would decide for the same platform state.
"""

import logging
from typing import TYPE_CHECKING, Iterable

from .models import (
    ComparisonOperator,
    ConditionConfig,
    DwellTimeCondition,
    NumericCompareCondition,
)

if TYPE_CHECKING:
    from .adapter import PlatformAdapter

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """
    Evaluates conditions for automation rules.

    Uses the platform adapter for entity states and timestamps.
    """

    def __init__(self, platform: "PlatformAdapter") -> None:
        self._platform = platform

    def evaluate(self, condition: ConditionConfig) -> bool:
        """
        Evaluate a condition.

        Args:
            condition: The condition to evaluate

        Returns:
            True if condition is met, False otherwise
        """
        if isinstance(condition, NumericCompareCondition):
            return self._check_numeric_compare(condition)
        elif isinstance(condition, DwellTimeCondition):
            return self._check_dwell_time(condition)
        else:
            logger.warning(f"Unknown condition type: {type(condition)}")
            return False

    def evaluate_all(self, conditions: Iterable[ConditionConfig]) -> bool:
        """
        Evaluate all conditions (AND logic).

        Returns:
            True if ALL conditions are met
        """
        for condition in conditions:
            if not self.evaluate(condition):
                logger.debug(f"Condition not met: {condition}")
                return False
        return True

    # =========================================================================
    # Condition Implementations
    # =========================================================================

    def _check_numeric_compare(self, condition: NumericCompareCondition) -> bool:
        """Compare the entity's numeric state, as `states(x) | float` does."""
        value = self._platform.get_numeric_state(condition.entity_id)
        if value is None:
            logger.warning(f"Numeric state unavailable: {condition.entity_id}")
            # float filter falls back to 0.0
            value = 0.0

        if condition.operator == ComparisonOperator.GT:
            return value > condition.value
        elif condition.operator == ComparisonOperator.LT:
            return value < condition.value
        return value == condition.value

    def _check_dwell_time(self, condition: DwellTimeCondition) -> bool:
        """Check whole minutes since last_changed exceed the threshold."""
        changed = self._platform.get_last_changed(condition.entity_id)
        if changed is None:
            logger.warning(f"Entity not found: {condition.entity_id}")
            return False

        elapsed = self._platform.get_current_time() - changed
        minutes = int(elapsed.total_seconds() / 60)
        return minutes > condition.minutes
