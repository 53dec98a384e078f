"""Best-effort word recovery from legacy binary Office files."""

import re
from typing import Iterator, Optional

from document_harvester.config import ExtractorConfig
from document_harvester.models import TextCandidate

METADATA_WORDS = ("microsoft", "powerpoint", "slide", "ppt", "office", "version", "created")

NUMERIC_ONLY = re.compile(r"^[\d\-_.]+$")
HAS_LETTER = re.compile(r"[A-Za-z]")


def _printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def iter_candidates(data: bytes) -> Iterator[TextCandidate]:
    """Yield every run of printable ASCII in the buffer.

    A single null byte inside a run is skipped when the next byte is
    printable, so UTF-16LE text comes through as one run.
    """
    chars: list[str] = []
    start = 0
    size = len(data)

    for index, byte in enumerate(data):
        if _printable(byte):
            if not chars:
                start = index
            chars.append(chr(byte))
        elif byte == 0 and chars and index + 1 < size and _printable(data[index + 1]):
            continue
        elif chars:
            yield TextCandidate(text="".join(chars), offset=start, end=index)
            chars = []

    if chars:
        yield TextCandidate(text="".join(chars), offset=start, end=size)


class BinaryHarvester:
    """Filters printable runs down to words that are plausibly prose.

    Rejects runs that are too short, have no letters, sit in null-dense
    regions (binary metadata) or mention Office metadata vocabulary.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

    def is_valid_word(self, candidate: TextCandidate, data: bytes) -> bool:
        word = candidate.text
        config = self.config

        if len(word) < config.min_word_length:
            return False
        if config.max_word_length is not None and len(word) > config.max_word_length:
            return False
        if not HAS_LETTER.search(word) or NUMERIC_ONLY.match(word):
            return False

        window = config.null_context_window
        before = data[max(0, candidate.offset - window):candidate.offset]
        after = data[candidate.end:candidate.end + window]
        if before.count(0) > config.max_context_nulls or after.count(0) > config.max_context_nulls:
            return False

        lowered = word.lower()
        return not any(meta in lowered for meta in METADATA_WORDS)

    def harvest(self, data: bytes) -> str:
        """Return up to ``max_binary_words`` unique plausible words, space-joined."""
        words: dict[str, None] = {}
        for candidate in iter_candidates(data):
            if candidate.text in words or not self.is_valid_word(candidate, data):
                continue
            words[candidate.text] = None
            if len(words) >= self.config.max_binary_words:
                break
        return " ".join(words)


def harvest_binary(data: bytes, config: Optional[ExtractorConfig] = None) -> str:
    return BinaryHarvester(config).harvest(data)
