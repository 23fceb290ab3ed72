# -*- coding: utf-8 -*-
""" Locate and read schema definition files. """

import logging
import os
from importlib import resources
from typing import Optional

from ..exc import SchemaError

logger = logging.getLogger(__name__)


def load_schema_source(name: str, package: Optional[str] = None) -> str:
    """
    Read schema definition text.

    Args:
        name: File name of the schema. When ``package`` is not set, this is a
            filesystem path.
        package: Dotted name of the package holding the schema as a resource
            file (e.g. ``"gqlwire.demos"``).

    Raises:
        :class:`~gqlwire.exc.SchemaError`: if the schema cannot be read.
    """
    try:
        if package is not None:
            source = (
                resources.files(package).joinpath(name).read_text("utf-8")
            )
        else:
            with open(os.path.expanduser(name), encoding="utf-8") as f:
                source = f.read()
    except (OSError, ModuleNotFoundError, UnicodeDecodeError) as err:
        location = "%s:%s" % (package, name) if package else name
        raise SchemaError(
            'Cannot read schema "%s" (%s)' % (location, err)
        ) from err

    logger.debug("Loaded schema %s (%d characters)", name, len(source))
    return source
