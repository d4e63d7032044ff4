import re
from typing import List

TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")
# Bengali danda, exclamation, question mark and full stop end a sentence
# only when whitespace follows, so "Next.js" or "3.14" stay whole
SENTENCE_END_RE = re.compile(r"(?<=[।!?.])\s+")


def strip_tags(text: str) -> str:
    """Replace every HTML tag with a single space."""
    return TAG_RE.sub(" ", text)


def normalize_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """Rich text to a single line of plain text."""
    if not text:
        return ""
    return normalize_whitespace(strip_tags(text))


def split_sentences(text: str) -> List[str]:
    """Split after each sentence terminator, keeping it on its sentence."""
    return [s.strip() for s in SENTENCE_END_RE.split(text) if s.strip()]
