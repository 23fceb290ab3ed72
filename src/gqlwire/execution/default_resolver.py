# -*- coding: utf-8 -*-

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .wrappers import ResolveInfo  # noqa: F401


def default_resolver(
    root: Any,
    args: Dict[str, Any],
    info: "ResolveInfo",
    __isinstance: Any = isinstance,
    __getattr: Any = getattr,
    __mapping_cls: Any = Mapping,
) -> Any:
    """Resolver used for fields without a bound resolver.

    - If ``root`` is a mapping, return ``root.get(field name)``.
    - Otherwise return the attribute named after the field, or ``None``.

    Values are returned as is: callables found this way are *not* called,
    bind an explicit resolver for computed fields.

    Args:
        root: Value of the resolved parent node.
        args: Coerced field arguments (unused).
        info: Resolution context.

    Returns:
        Resolved value.
    """
    field_name = info.field_definition.name
    if __isinstance(root, __mapping_cls):
        return root.get(field_name)
    return __getattr(root, field_name, None)
