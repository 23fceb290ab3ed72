# -*- coding: utf-8 -*-
"""
Validation of GraphQL (query) documents.

Note:
    This module is only concerned with validating query documents, not SDL
    documents which are validated when building an executable schema.
"""

# flake8: noqa

from .validate import SPECIFIED_RULES, validate_document
from .visitors import ValidationVisitor, VariablesCollector

__all__ = (
    "validate_document",
    "ValidationVisitor",
    "VariablesCollector",
    "SPECIFIED_RULES",
)
