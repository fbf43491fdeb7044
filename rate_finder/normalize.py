from __future__ import annotations

import datetime as _dt
import re
import unicodedata


_NON_WORD_RE = re.compile(r"\W")
_SPACES_RE = re.compile(r"\s+")


def normalize_key(text: object) -> str:
    if text is None:
        return ""
    s = unicodedata.normalize("NFKC", str(text))
    s = s.replace("\u00a0", " ").lower()
    s = _NON_WORD_RE.sub(" ", s)
    return _SPACES_RE.sub(" ", s).strip()


def clean_cell(value: object) -> str:
    if value is None or value != value:  # NaN
        return ""
    return str(value).strip()


def cell_text(value: object) -> str:
    """Render a decoded spreadsheet cell as the text a user sees in Excel."""
    if value is None or value != value:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, _dt.datetime):
        if value.time() == _dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, _dt.date):
        return value.isoformat()
    return str(value)


def _strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")


def sort_key(value: str) -> tuple[str, str]:
    # Accents and case only break ties, like a collator's primary strength.
    return _strip_accents(value).casefold(), value
