"""Allow-list policy.

Decides which classes a hydrator may instantiate from input data. This is a
security boundary: input documents choose nothing, but nested property
annotations do, and every class reached that way is checked here.

Decision table:

    allow-list   generic-only   accepted
    ----------   ------------   ---------------------------------------
    empty        off            any resolvable class
    non-empty    off            listed classes and their subclasses
    any          on             only the generic record type
"""

from __future__ import annotations

import logging

from entity_builder.core.config import HydratorConfig
from entity_builder.core.exceptions import InvalidTargetType, TypeResolutionError
from entity_builder.core.resolver import GENERIC_RECORD_TYPE, load_type, resolve_type

logger = logging.getLogger(__name__)


def allowed_classes(config: HydratorConfig) -> list[type]:
    """Resolve allow-list entries, dropping those that cannot be loaded."""
    classes: list[type] = []
    for entry in config.allowed_types:
        try:
            classes.append(load_type(entry))
        except TypeResolutionError as e:
            logger.debug("Ignoring unresolvable allow-list entry %r: %s", entry, e)
    return classes


def is_allowed_type(cls: type, config: HydratorConfig) -> bool:
    """Apply the allow-list decision table to a resolved class."""
    if config.restricted:
        listed = any(issubclass(cls, allowed) for allowed in allowed_classes(config))
        if not listed and not config.allow_generic_record_only:
            return False

    if config.allow_generic_record_only and cls is not GENERIC_RECORD_TYPE:
        return False

    return True


def check_target_type(target_type: object, config: HydratorConfig) -> type:
    """Resolve ``target_type`` and enforce the allow-list.

    Returns:
        The resolved class.

    Raises:
        InvalidTargetType: If the type is unresolvable or not allowed.
    """
    cls = resolve_type(target_type)
    if not is_allowed_type(cls, config):
        raise InvalidTargetType(target_type, "not in the allowed types")
    return cls
