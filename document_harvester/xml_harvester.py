"""Recover human-readable text runs from Office XML fragments.

Slide XML is matched with tag patterns rather than parsed, so fragments
that are truncated or not well-formed still yield their text. Every match
is stripped of markup and passed through :func:`is_valid_text` before it
can reach the output.
"""

import html
import re
from typing import Iterator

from document_harvester.models import TextCandidate

TAG_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("text_run", re.compile(r"<a:t[^>]*>[^<]+</a:t>")),
    ("paragraph", re.compile(r"<a:p[^>]*>[^<]+</a:p>")),
    ("text_body", re.compile(r"<p:txBody[^>]*>[^<]+</p:txBody>")),
    ("shape", re.compile(r"<p:sp[^>]*>[^<]+</p:sp>")),
    ("chart_value", re.compile(r"<c:v>[^<]+</c:v>")),
    ("chart_point", re.compile(r"<c:pt[^>]*>[^<]+</c:pt>")),
]

# Any text that starts with a letter and sits between two tags
BETWEEN_TAGS = re.compile(r">([A-Za-z][^<]{3,100})<")

ANY_TAG = re.compile(r"<[^>]+>")
NON_WORD_ONLY = re.compile(r"^[\d\s\W_]+$")

NOISE_SUBSTRINGS = ("xml", "http", "xmlns", "microsoft", "powerpoint", "slide", "ppt")


def strip_tags(fragment: str) -> str:
    return html.unescape(ANY_TAG.sub("", fragment)).strip()


def is_valid_text(content: str) -> bool:
    """Return True if content looks like prose rather than markup noise."""
    if not content or len(content) < 2:
        return False
    if NON_WORD_ONLY.match(content):
        return False
    lowered = content.lower()
    if any(noise in lowered for noise in NOISE_SUBSTRINGS):
        return False
    return any(ch.isalpha() for ch in content)


def iter_candidates(xml: str) -> Iterator[TextCandidate]:
    for tag, pattern in TAG_PATTERNS:
        for match in pattern.finditer(xml):
            yield TextCandidate(text=strip_tags(match.group(0)), tag=tag)

    for match in BETWEEN_TAGS.finditer(xml):
        yield TextCandidate(text=html.unescape(match.group(1)).strip(), tag="between_tags")


def harvest_xml(xml: str) -> str:
    """Return the unique valid text runs of an XML fragment, space-joined.

    Examples:
        >>> harvest_xml("<a:t>Hello</a:t><a:t>Hello</a:t><a:t>123</a:t>")
        'Hello'
    """
    seen: dict[str, None] = {}
    for candidate in iter_candidates(xml):
        if candidate.text not in seen and is_valid_text(candidate.text):
            seen[candidate.text] = None
    return " ".join(seen)
