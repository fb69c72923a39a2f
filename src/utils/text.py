"""Text cleaning and normalization utilities.

Handles the Norwegian letters that show up in venue names and price text
(æ, ø, å) and the whitespace quirks of scraped HTML.
"""

import re
import unicodedata

# Letters that NFKD does not decompose into base letter + combining mark
_EXTRA_FOLDS = str.maketrans({
    "ø": "o",
    "Ø": "O",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ð": "d",
    "þ": "th",
    "ł": "l",
})


def normalize_whitespace(text: str, preserve_newlines: bool = False) -> str:
    """Normalize whitespace in text.

    Non-breaking spaces count as whitespace.

    Args:
        text: Input text
        preserve_newlines: If True, preserve newlines (normalized to max 2)

    Returns:
        Text with normalized whitespace
    """
    if not text:
        return text

    text = text.replace("\u00a0", " ")
    if preserve_newlines:
        text = re.sub(r"[ \t]+", " ", text)
        text = re.sub(r"\n{3,}", "\n\n", text)
    else:
        text = re.sub(r"\s+", " ", text)

    return text.strip()


def strip_diacritics(text: str) -> str:
    """Remove accents and fold Nordic letters to ASCII look-alikes.

    "Røkeriet" -> "Rokeriet", "Åsane" -> "Asane", "Muséplass" -> "Museplass".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.translate(_EXTRA_FOLDS)


def fold_key(text: str | None) -> str:
    """Build a lookup key: trimmed, single-spaced, case-folded, accent-free."""
    if not text:
        return ""
    return strip_diacritics(normalize_whitespace(text).casefold())


def truncate(text: str | None, max_length: int = 60, suffix: str = "...") -> str:
    """Truncate text for one-line display.

    Args:
        text: Input text
        max_length: Maximum length including suffix
        suffix: Appended when the text was cut

    Returns:
        Truncated text ("" for None)
    """
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)].rstrip() + suffix
