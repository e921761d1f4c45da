# Global imports
from enum import Enum
from typing import Any, List, Tuple

from constants import NUMBER_PRECISION

# (tag, contents); contents may hold tokens and nested nodes
Node = Tuple[str, List[Any]]


class SExpSymbol:
    """A bare (unquoted) token such as ``yes`` or ``F.Cu``."""

    def __init__(self, val: str):
        self.value = val


YES = SExpSymbol("yes")


def format_number(val: float) -> str:
    if isinstance(val, int):
        return str(val)
    s = f"{val:.{NUMBER_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


def quote_string(val: str) -> str:
    s = val.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{s}"'


def _format_token(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float)):
        return format_number(val)
    if isinstance(val, SExpSymbol):
        return val.value
    if isinstance(val, Enum):
        return str(val.value)
    # fallback to quoted string
    return quote_string(str(val))


def serialize_node(node: Node) -> str:
    """Serialize a (tag, contents) tuple on a single line. ``None`` items are skipped."""
    tag, contents = node
    tokens = [tag]
    for item in contents:
        if item is None:
            continue
        if isinstance(item, tuple):
            tokens.append(serialize_node(item))
        else:
            tokens.append(_format_token(item))
    return "(" + " ".join(tokens) + ")"


def open_node(node: Node) -> str:
    """Like ``serialize_node`` but leaves the list open for child lines."""
    return serialize_node(node)[:-1]
