"""printf-style interpolation for test descriptions.

Mirrors the placeholder set test authors are used to from ``util.format``:
``%s`` ``%d`` ``%i`` ``%f`` ``%j`` ``%o`` ``%O`` and ``%%``. Placeholders with
no argument left are kept as-is; surplus arguments are appended, separated by
spaces.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

_PLACEHOLDER = re.compile(r"%[sdifjoO%]")


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _format_number(number: float, integer: bool) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if integer or number.is_integer():
        return str(int(number))
    return repr(number)


def _convert(spec: str, value: Any) -> str:
    match spec:
        case "%s":
            return str(value)
        case "%d" | "%i":
            return _format_number(_to_number(value), integer=True)
        case "%f":
            return _format_number(_to_number(value), integer=False)
        case "%j":
            try:
                return json.dumps(value)
            except (TypeError, ValueError):
                return "[Circular]" if isinstance(value, (list, dict)) else str(value)
        case _:
            return repr(value)


def format_message(template: Any, *args: Any) -> str:
    """Interpolate ``args`` into ``template``."""
    if not isinstance(template, str):
        return " ".join(str(part) for part in (template, *args))
    if not args:
        return template

    remaining = list(args)

    def replace(match: re.Match[str]) -> str:
        spec = match.group(0)
        if spec == "%%":
            return "%"
        if not remaining:
            return spec
        return _convert(spec, remaining.pop(0))

    message = _PLACEHOLDER.sub(replace, template)
    if remaining:
        message = " ".join([message, *(str(value) for value in remaining)])
    return message
