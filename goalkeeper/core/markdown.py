"""Goal description extraction from plan documents.

A plan is summarizable only when it opens with a top-level heading followed
by a paragraph::

    # Title

    First paragraph, possibly
    spanning lines.

    ## Anything else

yields ``"Title\\n\\nFirst paragraph, possibly\\nspanning lines."``.  Any
other shape has no description.
"""

from __future__ import annotations

HEADING_PREFIX = "# "


def extract_description(plan: str) -> str | None:
    """Return ``"{title}\\n\\n{first paragraph}"`` or ``None``."""
    lines = plan.splitlines()

    # The heading must be the very first line.
    if not lines or not lines[0].startswith(HEADING_PREFIX):
        return None
    title = lines[0][len(HEADING_PREFIX) :].strip()
    if not title:
        return None

    index = _skip_blank(lines, 1)
    paragraph: list[str] = []
    while index < len(lines) and lines[index].strip():
        paragraph.append(lines[index].rstrip())
        index += 1
    if not paragraph:
        return None

    return f"{title}\n\n" + "\n".join(paragraph)


def _skip_blank(lines: list[str], index: int) -> int:
    while index < len(lines) and not lines[index].strip():
        index += 1
    return index
