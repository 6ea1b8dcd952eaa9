"""
Variable substitution service for resolving {{variable}} placeholders.

Every placeholder is replaced in a single left-to-right pass using the
first enabled variable whose key matches the trimmed placeholder name.
Unknown or disabled names resolve to the empty string, so resolution
never fails and never leaves placeholder text behind.
"""

import re
from typing import Iterable, List, Protocol, TypeVar


# Non-greedy match of {{ anything }}
VARIABLE_PATTERN = re.compile(r'\{\{(.*?)\}\}')


class VariableLike(Protocol):
    key: str
    value: str
    enabled: bool


RowT = TypeVar("RowT")


def extract_variables(template: str) -> List[str]:
    """
    Extract all trimmed placeholder names from a template string.

    Example:
        >>> extract_variables("Hello {{ name }}, your id is {{id}}")
        ['name', 'id']
    """
    if not template:
        return []

    return [name.strip() for name in VARIABLE_PATTERN.findall(template)]


def lookup(name: str, variables: Iterable[VariableLike]) -> str | None:
    """Return the value of the first enabled variable named ``name``, if any."""
    for variable in variables:
        if variable.enabled and variable.key == name:
            return variable.value
    return None


def resolve(template: str, variables: Iterable[VariableLike]) -> str:
    """
    Replace every {{name}} placeholder in ``template``.

    Substituted values are inserted verbatim; placeholders they contain
    are not resolved again.

    Example:
        >>> resolve("{{host}}/{{missing}}", [Variable(key="host", value="api")])
        'api/'
    """
    if not template:
        return template

    variables = list(variables)

    def replace_match(match: re.Match) -> str:
        value = lookup(match.group(1).strip(), variables)
        return value if value is not None else ""

    return VARIABLE_PATTERN.sub(replace_match, template)


def resolve_rows(rows: Iterable[RowT], variables: Iterable[VariableLike]) -> List[RowT]:
    """Resolve the key and value of every row, returning updated copies."""
    variables = list(variables)
    return [
        row.model_copy(update={
            "key": resolve(row.key, variables),
            "value": resolve(row.value, variables),
        })
        for row in rows
    ]
