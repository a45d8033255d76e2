from collections.abc import Sequence
from typing import Any

import structlog

log = structlog.get_logger(__name__)

XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

def escape_xml(text: str | None) -> str:
    # escapes the five predefined xml entities. callers escape data before
    # it goes into a context; the engine itself never escapes.
    if not text:
        return ""
    return "".join(XML_ESCAPES.get(ch, ch) for ch in str(text))

def is_sequence(value: Any) -> bool:
    # true for list-like values a loop can iterate; strings and bytes are scalars.
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))

def to_text(value: Any) -> str:
    # string form of a context value as it appears in rendered output.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
