# ==============================================================================
# CASE CONVERSION - camelCase <-> snake_case key translation
# ==============================================================================
# Applied once at adapter input and once at adapter output so the rest of
# the application can use one naming convention regardless of backend
# ==============================================================================

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Union, overload

_UPPER = re.compile(r"[A-Z]")
_UNDERSCORE_LOWER = re.compile(r"_([a-z])")

Row = Dict[str, Any]


def camel_to_snake(name: str) -> str:
    """
    Convert a camelCase name to snake_case.

    Example:
        >>> camel_to_snake("stripeCustomerId")
        'stripe_customer_id'
    """
    return _UPPER.sub(lambda m: f"_{m.group(0).lower()}", name)


def snake_to_camel(name: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Example:
        >>> snake_to_camel("stripe_customer_id")
        'stripeCustomerId'
    """
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), name)


@overload
def camel_to_snake_keys(data: Mapping[str, Any]) -> Row: ...
@overload
def camel_to_snake_keys(data: List[Mapping[str, Any]]) -> List[Row]: ...


def camel_to_snake_keys(
    data: Union[Mapping[str, Any], List[Mapping[str, Any]]],
) -> Union[Row, List[Row]]:
    """Rename the keys of a row (or of each row in a list) to snake_case."""
    if isinstance(data, list):
        return [camel_to_snake_keys(item) for item in data]
    return {camel_to_snake(key): value for key, value in data.items()}


@overload
def snake_to_camel_keys(data: Mapping[str, Any]) -> Row: ...
@overload
def snake_to_camel_keys(data: List[Mapping[str, Any]]) -> List[Row]: ...


def snake_to_camel_keys(
    data: Union[Mapping[str, Any], List[Mapping[str, Any]]],
) -> Union[Row, List[Row]]:
    """Rename the keys of a row (or of each row in a list) to camelCase."""
    if isinstance(data, list):
        return [snake_to_camel_keys(item) for item in data]
    return {snake_to_camel(key): value for key, value in data.items()}
