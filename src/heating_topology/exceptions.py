"""
Exception hierarchy for heating-topology.

All errors are raised synchronously while building or compiling a topology.
"""


class HeatingTopologyError(Exception):
    """Base exception for heating-topology."""

    pass


class ConfigurationError(HeatingTopologyError):
    """Topology or compiler configuration violates a structural invariant."""

    pass


class IdentifierCollisionError(HeatingTopologyError):
    """Two distinct entities derived the same signal identifier."""

    def __init__(self, entity_id: str, first: str, second: str) -> None:
        super().__init__(
            f"Identifier '{entity_id}' derived by both '{first}' and '{second}'; "
            "rename one of them"
        )
        self.entity_id = entity_id
        self.first = first
        self.second = second
