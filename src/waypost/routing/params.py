"""Path parameter converters.

Built-in converters for route pattern segments like ``{id:int}``.
Matched values stay strings: converters only decide whether a path
segment is accepted.
"""

import re

# param_type -> compiled full-match pattern for one path segment
CONVERTERS: dict[str, re.Pattern[str]] = {
    "str": re.compile(r"[^/]+"),
    "int": re.compile(r"\d+"),
    "float": re.compile(r"\d+(?:\.\d+)?"),
    "slug": re.compile(r"[A-Za-z0-9_-]+"),
}


def accepts(value: str, param_type: str) -> bool:
    """Return True if *value* is a valid segment for *param_type*.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return CONVERTERS[param_type].fullmatch(value) is not None
