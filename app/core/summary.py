from app.core.text import clean_text, split_sentences

DEFAULT_MAX_LENGTH = 300
ELLIPSIS = "..."


def extract_summary(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Build a plain-text summary of at most `max_length` characters.

    Markup is stripped and whitespace collapsed. Text that is already short
    enough is returned as is; otherwise whole sentences are taken from the
    start until the next one would not fit. When not even the first sentence
    fits, the text is cut at the last space before `max_length` and an
    ellipsis is appended.
    """
    if not text:
        return ""

    clean = clean_text(text)
    if len(clean) <= max_length:
        return clean

    summary = ""
    for sentence in split_sentences(clean):
        candidate = f"{summary} {sentence}" if summary else sentence
        if len(candidate) > max_length:
            break
        summary = candidate

    if summary:
        return summary

    return truncate(clean, max_length)


def truncate(text: str, max_length: int) -> str:
    """Cut `text` at a word boundary and mark the cut with an ellipsis."""
    cut = text[:max_length]
    last_space = cut.rfind(" ")

    if last_space != -1:
        cut = cut[:last_space]

    return cut.rstrip() + ELLIPSIS
