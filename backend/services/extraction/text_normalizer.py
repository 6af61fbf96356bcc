"""
Whitespace normalization for extracted document text.
"""
import re


def normalize_text(text: str) -> str:
    """
    Collapse line endings and whitespace of raw extracted text.

    Operations:
        - CRLF / CR -> LF
        - Runs of spaces and tabs -> single space
        - Trim every line
        - 3+ consecutive newlines -> exactly two, then trim the whole text
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
