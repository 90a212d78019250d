"""Default injection for fields whose JSON key was absent."""

from __future__ import annotations

import copy
import logging
from typing import Any

from pedantigo.metadata import FieldMeta

logger = logging.getLogger(__name__)


def default_for(field: FieldMeta, instance: Any) -> Any:
    """Produce the default value for ``field``.

    ``default=`` literals are parsed once at build time and copied per use;
    ``defaultUsingMethod=`` calls the named method on the partially-populated
    record.
    """
    if field.default_method is not None:
        value = getattr(instance, field.default_method)()
        logger.debug("Default for %s from %s()", field.name, field.default_method)
        return value
    return copy.deepcopy(field.default_value)
