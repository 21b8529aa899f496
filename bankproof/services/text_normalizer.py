import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """
    Collapse recognized text to a single line for pattern matching.

    CRLF becomes LF, every whitespace run (newlines included) becomes one
    space, and the ends are trimmed. Idempotent.
    """
    text = raw.replace("\r\n", "\n")
    return _WHITESPACE_RUN.sub(" ", text).strip()
