"""
Template expression rendering.

Renders the Jinja-style state expressions consumed verbatim by the rule
runtime. Entity references normally use dotted attribute access
(``states.switch.boiler``); object ids that are not valid attribute names,
such as gateway hardware addresses (``switch.0x04cf8cdf3c89dcdd``), must
use index access (``states.switch['0x04cf8cdf3c89dcdd']``).
"""

import re
from typing import Tuple

from heating_topology.exceptions import ConfigurationError

ATTRIBUTE_SAFE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def split_entity_id(entity_id: str) -> Tuple[str, str]:
    """
    Split an entity id into (domain, object_id).

    Raises:
        ConfigurationError: If the id is not of the form domain.object_id
    """
    if not isinstance(entity_id, str):
        raise ConfigurationError(f"Invalid entity id: {entity_id!r}")
    domain, sep, object_id = entity_id.partition(".")
    if not sep or not domain or not object_id:
        raise ConfigurationError(f"Invalid entity id: {entity_id!r}")
    return domain, object_id


def render_state_reference(entity_id: str) -> str:
    """Render a reference to an entity's state object."""
    domain, object_id = split_entity_id(entity_id)
    if ATTRIBUTE_SAFE.match(object_id):
        return f"states.{domain}.{object_id}"
    return f"states.{domain}['{object_id}']"


def render_states(entity_id: str) -> str:
    return f"states('{entity_id}')"


def render_state_attr(entity_id: str, attribute: str) -> str:
    return f"state_attr('{entity_id}', '{attribute}')"


def render_is_state(entity_id: str, state: str) -> str:
    return f"is_state('{entity_id}', '{state}')"


def render_dwell_guard(entity_id: str, minutes: int) -> str:
    """
    Render a guard that holds once the entity has kept its current state
    for more than ``minutes`` whole minutes, measured from last_changed.
    """
    reference = render_state_reference(entity_id)
    return (
        f"{{% set changed = as_timestamp({reference}.last_changed) %}}\n"
        "{% set now = as_timestamp(now()) %}\n"
        "{% set time = now - changed %}\n"
        "{% set minutes = (time / 60) | int %}\n"
        f"{{{{ minutes > {minutes} }}}}"
    )


def format_number(value: float) -> str:
    """Render a number without a trailing .0 for integral values."""
    return str(int(value)) if float(value).is_integer() else str(value)
