"""Learning filename codec and markdown rendering.

Learnings are stored one per file, named after their timestamp with ``:``
and ``.`` replaced by ``_``::

    2024-01-01T12:30:45.123Z  <->  2024-01-01T12_30_45_123Z.md

Decoding restores punctuation at fixed offsets, so only the canonical
millisecond UTC form round-trips.  Writers must call ``validate_timestamp``
first.
"""

from __future__ import annotations

import re

import jinja2

from goalkeeper.core.errors import InvalidTimestampError
from goalkeeper.core.models.goal import Learning

LEARNING_SUFFIX = ".md"

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")
FILENAME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}_\d{2}_\d{2}_\d{3}Z\.md$")

# Offsets of the substituted characters in a canonical timestamp.
_RESTORE = {13: ":", 16: ":", 19: "."}

LEARNING_TEMPLATE = """\
## {{ learning.title }}

### Context
{{ learning.context }}

### Details
{{ learning.details }}

### Rationale
{{ learning.rationale }}

### Alternatives Considered
{{ learning.alternatives }}

### References
{{ learning.references }}
"""

# Markdown output: no HTML autoescaping.
_TEMPLATE = jinja2.Environment(autoescape=False, keep_trailing_newline=True).from_string(LEARNING_TEMPLATE)  # noqa: S701


def validate_timestamp(timestamp: str) -> None:
    """Raise ``InvalidTimestampError`` unless *timestamp* is ``YYYY-MM-DDTHH:MM:SS.sssZ``."""
    if not TIMESTAMP_PATTERN.match(timestamp):
        raise InvalidTimestampError(timestamp)


def encode_filename(timestamp: str) -> str:
    return timestamp.replace(":", "_").replace(".", "_") + LEARNING_SUFFIX


def is_learning_filename(filename: str) -> bool:
    return FILENAME_PATTERN.match(filename) is not None


def decode_filename(filename: str) -> str:
    """Inverse of ``encode_filename`` for canonical names.

    Raises ``InvalidTimestampError`` for anything else.
    """
    if not is_learning_filename(filename):
        raise InvalidTimestampError(filename)
    chars = list(filename[: -len(LEARNING_SUFFIX)])
    for offset, char in _RESTORE.items():
        chars[offset] = char
    return "".join(chars)


def format_learning(learning: Learning) -> str:
    """Render a learning as markdown.  Field values are inserted verbatim, without escaping."""
    return _TEMPLATE.render(learning=learning)
