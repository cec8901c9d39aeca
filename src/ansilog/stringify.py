"""
Readable, colorable, cycle-safe rendering of arbitrary values.

``stringify`` walks containers recursively and renders them as
``{ key: value }`` or ``[ value ]``. Colors and quote characters are plain
parameters, so the named presets at the bottom are just fixed argument
sets over the one function.

Cycle detection tracks the identities of the containers on the current
descent path. A container that is already on the path renders as
``[Circular]``; one that is merely referenced twice from sibling branches
renders normally both times.
"""

import dataclasses
import numbers
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Set, Tuple

from .colors import fg256


# Containers with at least this many entries collapse to '{...}' when nested
MAX_ENTRIES = 100


class StringifyError(TypeError):
    """Raised when a value of an unsupported type reaches the serializer."""


class _Undefined:
    """Sentinel rendered as ``undefined``, distinct from None (``null``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'UNDEFINED'

    def __bool__(self):
        return False


UNDEFINED = _Undefined()


class Symbol:
    """Opaque handle compared by identity, rendered as ``Symbol(description)``."""

    __slots__ = ('description',)

    def __init__(self, description: str = ''):
        self.description = description

    def __repr__(self):
        return f'Symbol({self.description})'


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def _entries(value: Any) -> Optional[Tuple[bool, Iterable[Tuple[Any, Any]]]]:
    """Return (is_array, entries) for a container, or None for a leaf."""
    if isinstance(value, Mapping):
        return False, list(value.items())
    if _is_sequence(value):
        return True, list(enumerate(value))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return False, [(f.name, getattr(value, f.name))
                       for f in dataclasses.fields(value)]
    if not callable(value) and hasattr(value, '__dict__'):
        return False, list(vars(value).items())
    return None


def stringify(
    payload: Any,
    enable_colors: bool = False,
    color_payload: int = 252,
    color_key: int = 250,
    color_string: int = 35,
    color_number: int = 220,
    color_boolean: int = 159,
    color_undefined: int = 1,
    key_quote: str = '',
    string_quote: str = "'",
    seen: Optional[Set[int]] = None,
) -> str:
    """Render ``payload`` as a display string.

    Args:
        payload: Any value. Containers are expanded, leaves rendered by type.
        enable_colors: Wrap each syntactic piece in a 256 color escape
        color_payload: Color of the container delimiters
        color_key: Color of mapping keys
        color_string: Color of string values
        color_number: Color of numbers
        color_boolean: Color of booleans
        color_undefined: Color of null, undefined, functions and [Circular]
        key_quote: Quote placed around mapping keys
        string_quote: Quote placed around string values
        seen: Identities of the containers on the current descent path

    Returns:
        The rendered string.

    Raises:
        StringifyError: If a value of an unsupported type is reached.
    """
    if payload is None:
        return 'null'
    if payload is UNDEFINED:
        return 'undefined'

    def clr(color: int) -> str:
        return fg256(color) if enable_colors else ''

    def reset() -> str:
        return '\x1b[0m' if enable_colors else ''

    if seen is None:
        seen = set()

    container = _entries(payload)
    if container is None:
        return _render_leaf(payload, clr, reset, color_string, color_number,
                            color_boolean, color_undefined, string_quote)

    if id(payload) in seen:
        return f'{clr(color_undefined)}[Circular]{reset()}'
    seen.add(id(payload))

    is_array, entries = container
    parts = []
    for key, value in entries:
        child = None if value is None or value is UNDEFINED else _entries(value)
        if child is None:
            rendered = _render_leaf(value, clr, reset, color_string, color_number,
                                    color_boolean, color_undefined, string_quote)
        elif len(child[1]) < MAX_ENTRIES:
            rendered = stringify(value, enable_colors, color_payload, color_key,
                                 color_string, color_number, color_boolean,
                                 color_undefined, key_quote, string_quote, seen)
        else:
            rendered = '{...}'
        if is_array:
            parts.append(rendered)
        else:
            parts.append(f'{clr(color_key)}{key_quote}{key}{key_quote}{reset()}: {rendered}')

    seen.discard(id(payload))

    opening, closing = ('[ ', ']') if is_array else ('{ ', '}')
    return (f'{reset()}{clr(color_payload)}{opening}' + ', '.join(parts)
            + f' {clr(color_payload)}{closing}{reset()}')


def _render_leaf(value, clr, reset, color_string, color_number, color_boolean,
                 color_undefined, string_quote) -> str:
    if value is None:
        return f'{clr(color_undefined)}null{reset()}'
    if value is UNDEFINED:
        return f'{clr(color_undefined)}undefined{reset()}'
    if isinstance(value, str):
        return f'{clr(color_string)}{string_quote}{value}{string_quote}{reset()}'
    # bool before Number: bool is an int subclass
    if isinstance(value, bool):
        return f"{clr(color_boolean)}{'true' if value else 'false'}{reset()}"
    if isinstance(value, numbers.Number):
        return f'{clr(color_number)}{value}{reset()}'
    if isinstance(value, Symbol):
        return f'Symbol({value.description})'
    if callable(value):
        return f'{clr(color_undefined)}(function){reset()}'
    raise StringifyError(f'Stringify unknown type: {type(value).__name__}')


# =============================================================================
# Presets
# =============================================================================

def payload_stringify(payload: Any) -> str:
    """JSON-like rendering: double quotes on keys and strings, no colors."""
    return stringify(payload, False, 0, 0, 0, 0, 0, 0, '"', '"')


def color_stringify(payload: Any) -> str:
    """Colored rendering for terminal output."""
    return stringify(payload, True, 69, 252, 2, 3, 6, 168)


def history_stringify(payload: Any) -> str:
    """Colored rendering for history records."""
    return stringify(payload, True, 0, 208, 247, 247, 247, 247)


def mqtt_stringify(payload: Any) -> str:
    """Colored rendering for message bus payloads."""
    return stringify(payload, True, 69, 245)


def debug_stringify(payload: Any) -> str:
    """Colored rendering for debug dumps."""
    return stringify(payload, True, 69, 245, 2, 3, 6, 168)
