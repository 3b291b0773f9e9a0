"""Template signature detection for demangled symbol names.

Provides parse_template_signature() for splitting a name such as
``Vec<Foo<int>>::push`` into its template family (``Vec``) and the argument
list of its outermost template (``Foo<int>``).

The matcher is a single left-to-right depth scan, not a C++ grammar. It
prefers treating an ambiguous name as a plain symbol over guessing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "NON_TEMPLATE_GROUP_PREFIX",
    "TemplateSignature",
    "parse_template_signature",
]

NON_TEMPLATE_GROUP_PREFIX = "[non-template]"

# Characters allowed right before the opening '<' of an argument list
_PRECEDING_CHAR_REGEX = re.compile(r"[A-Za-z0-9_>\])]")


@dataclass(frozen=True)
class TemplateSignature:
    """Template family and specialization parsed from a symbol name.

    Attributes:
        group_name: Text before the first ``<``, stripped.
        specialization_key: Stripped text inside the outermost brackets, or
            None when the argument list is empty.
    """

    group_name: str
    specialization_key: Optional[str]


def parse_template_signature(name: Optional[str]) -> Optional[TemplateSignature]:
    """Detect a template instantiation in ``name``.

    Args:
        name: Display name of a symbol. None is treated as "".

    Returns:
        TemplateSignature, or None when the name does not look like a template
        instantiation (no ``<``, empty base, a character right before the
        first ``<`` that cannot precede an argument list, or unbalanced
        brackets).

    Examples:
        >>> parse_template_signature("Foo<Bar<Baz>>")
        TemplateSignature(group_name='Foo', specialization_key='Bar<Baz>')
        >>> parse_template_signature("a < b") is None
        True
    """
    if not isinstance(name, str):
        return None

    lt_index = name.find("<")
    if lt_index == -1:
        return None

    base = name[:lt_index].strip()
    if not base:
        return None

    if not _PRECEDING_CHAR_REGEX.fullmatch(name[lt_index - 1]):
        return None

    depth = 0
    for index in range(lt_index, len(name)):
        char = name[index]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                specialization = name[lt_index + 1 : index].strip()
                return TemplateSignature(
                    group_name=base,
                    specialization_key=specialization or None,
                )

    return None
