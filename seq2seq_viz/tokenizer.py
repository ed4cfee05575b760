"""Display tokenizer for input and translated sentences."""

import re

# Runs of whitespace, commas and periods separate tokens
_SEPARATORS = re.compile(r"[\s,.]+")


def tokenize(text: str) -> list[str]:
    """Split text into non-empty lowercase display tokens.

    Empty, whitespace-only or punctuation-only input yields an empty list.
    """
    return [token for token in _SEPARATORS.split(text.lower().strip()) if token]
