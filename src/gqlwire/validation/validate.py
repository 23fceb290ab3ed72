# -*- coding: utf-8 -*-

from typing import TYPE_CHECKING, List, Optional, Sequence, Type

from ..exc import ValidationError
from ..lang import ast as _ast
from ..lang.visitor import ChainedVisitor
from ..utilities.type_info import TypeInfoVisitor
from . import rules as _rules
from .visitors import ValidationVisitor

if TYPE_CHECKING:
    from ..schema.executable import ExecutableSchema  # noqa: F401

SPECIFIED_RULES = (
    _rules.ExecutableDefinitionsChecker,
    _rules.UniqueOperationNameChecker,
    _rules.LoneAnonymousOperationChecker,
    _rules.KnownTypeNamesChecker,
    _rules.FragmentsOnCompositeTypesChecker,
    _rules.VariablesAreInputTypesChecker,
    _rules.ScalarLeafsChecker,
    _rules.FieldsOnCorrectTypeChecker,
    _rules.UniqueFragmentNamesChecker,
    _rules.KnownFragmentNamesChecker,
    _rules.NoUnusedFragmentsChecker,
    _rules.NoFragmentCyclesChecker,
    _rules.UniqueVariableNamesChecker,
    _rules.NoUndefinedVariablesChecker,
    _rules.NoUnusedVariablesChecker,
    _rules.KnownDirectivesChecker,
    _rules.KnownArgumentNamesChecker,
    _rules.UniqueArgumentNamesChecker,
    _rules.ProvidedRequiredArgumentsChecker,
)  # type: Sequence[Type[ValidationVisitor]]


def validate_document(
    schema: "ExecutableSchema",
    document: _ast.Document,
    rules: Optional[Sequence[Type[ValidationVisitor]]] = None,
) -> List[ValidationError]:
    """
    Check that a document can be executed against a schema.

    All rules are run in a single traversal of the document.

    Args:
        schema: Schema to validate against
        document: Parsed document
        rules: Validation rules to apply, defaults to :data:`SPECIFIED_RULES`.

    Returns:
        Validation errors, in rule order. An empty list means the document is
        valid.
    """
    type_info = TypeInfoVisitor(schema)
    validators = [
        cls(schema, type_info)
        for cls in (SPECIFIED_RULES if rules is None else rules)
    ]
    ChainedVisitor(type_info, *validators).visit(document)
    return [err for validator in validators for err in validator.errors]
