"""Text normalization for intent classification."""

import re

_WORD_RE = re.compile(r"\w+")


def _has_digit(token: str) -> bool:
    return any(ch.isdigit() for ch in token)


def normalize(text: str) -> list[str]:
    """Lower-case text, split it into word tokens and drop tokens with digits."""
    tokens = _WORD_RE.findall(text.lower())
    return [token for token in tokens if not _has_digit(token)]
