"""Tabgroup path parsing.

A tabgroup can be authored as a single name (``"demographics"``), a slash
path (``"demographics/details/regional"``), a list of names, or explicit
position->name pairs (``{1: "demographics", 2: "details"}`` or
``[(2, "details"), (1, "demographics")]``). All forms normalize to a tuple
of trimmed, non-empty segments.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from dc_common.errors import EmptyPathError, InvalidPathShapeError

PATH_SEPARATOR = "/"

_SHAPE_HINT = (
    "tabgroup must be a string ('demographics' or 'demographics/details'), "
    "a list of names, or position->name pairs ({1: 'demographics', 2: 'details'})"
)


def parse_path(spec: Any) -> tuple[str, ...] | None:
    """Normalize a tabgroup specification into ordered segments.

    Returns None when no tabgroup was given.
    """
    if spec is None:
        return None
    if isinstance(spec, str):
        segments = _clean(spec.split(PATH_SEPARATOR))
    elif isinstance(spec, Mapping):
        segments = _clean(_ordered_values(list(spec.items()), spec))
    elif isinstance(spec, Sequence) and not isinstance(spec, (bytes, bytearray)):
        if spec and all(_is_pair(part) for part in spec):
            segments = _clean(_ordered_values([tuple(part) for part in spec], spec))
        elif all(isinstance(part, str) for part in spec):
            segments = _clean(spec)
        else:
            raise InvalidPathShapeError(_SHAPE_HINT, context={"tabgroup": spec})
    else:
        raise InvalidPathShapeError(_SHAPE_HINT, context={"tabgroup": spec})

    if not segments:
        raise EmptyPathError(
            "tabgroup cannot be empty after parsing", context={"tabgroup": spec}
        )
    return segments


def format_path(segments: Sequence[str] | None) -> str:
    """Render segments back into slash notation."""
    return PATH_SEPARATOR.join(segments or ())


def _is_pair(part: Any) -> bool:
    return isinstance(part, (tuple, list)) and len(part) == 2


def _position(key: Any, spec: Any) -> int:
    if isinstance(key, bool):
        raise InvalidPathShapeError(_SHAPE_HINT, context={"tabgroup": spec})
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.strip().isdigit():
        return int(key.strip())
    raise InvalidPathShapeError(
        f"tabgroup position keys must be integers, got {key!r}",
        context={"tabgroup": spec},
    )


def _ordered_values(pairs: list[tuple[Any, Any]], spec: Any) -> list[str]:
    positioned = []
    for key, value in pairs:
        if not isinstance(value, str):
            raise InvalidPathShapeError(
                f"tabgroup segment names must be strings, got {value!r}",
                context={"tabgroup": spec},
            )
        positioned.append((_position(key, spec), value))
    positioned.sort(key=lambda pair: pair[0])
    return [value for _, value in positioned]


def _clean(parts: Sequence[str]) -> tuple[str, ...]:
    return tuple(part.strip() for part in parts if part.strip())
