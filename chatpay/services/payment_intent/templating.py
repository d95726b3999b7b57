"""Default variable interpolator: replaces `{{name}}` with bound values."""

import re
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from chatpay.services.payment_intent.schemas import Variable


Interpolate = Callable[[str | None], str]

_VARIABLE_PATTERN = re.compile(r"\{\{(.*?)\}\}")


class VariableInterpolator(Protocol):
    """Builds a template resolver bound to one request's variables."""

    def __call__(self, variables: Iterable[Variable]) -> Interpolate: ...


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_variables(variables: Iterable[Variable]) -> Interpolate:
    """Return a function that substitutes the given variables into a template.

    Unknown names and variables without a value resolve to an empty string. A
    missing template resolves to an empty string too.
    """

    values: dict[str, Any] = {}
    for variable in variables:
        values.setdefault(variable.name, variable.value)

    def interpolate(template: str | None) -> str:
        if not template:
            return ""
        return _VARIABLE_PATTERN.sub(lambda m: _stringify(values.get(m.group(1).strip())), template)

    return interpolate
