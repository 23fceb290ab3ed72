# -*- coding: utf-8 -*-
"""
Helpers shared by the executor and the document validator.
"""

# flake8: noqa

from .coerce_value import (
    coerce_argument_values,
    coerce_value,
    coerce_variable_values,
)
from .collect_fields import GroupedFields, collect_fields
from .value_from_ast import value_from_ast
