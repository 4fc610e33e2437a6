import re
import unicodedata
from typing import Optional, Tuple

_SEPARATORS_RE = re.compile(r"[-_']")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def strip_accents(s: str) -> str:
    decomposed = unicodedata.normalize("NFD", s)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def standardize_string(s: Optional[str]) -> str:
    """
    Canonical form used for every address comparison.

    "Évian-les-Bains" and "evian les bains" both become "evian les bains".
    """
    if not s:
        return ""
    s = strip_accents(s.lower())
    s = _SEPARATORS_RE.sub(" ", s)
    s = _NON_ALNUM_RE.sub("", s)
    return normalize_text(s)


def _zip_index(address: Optional[str], zip_code: Optional[str]) -> int:
    if not address or not zip_code:
        return -1
    return address.find(zip_code)


def extract_street(address: Optional[str], zip_code: Optional[str]) -> Optional[str]:
    """Text before the zip code: "9 Rue de la Paix 75001 Paris" -> "9 Rue de la Paix"."""
    index = _zip_index(address, zip_code)
    if index == -1:
        return None
    return address[:index].strip() or None


def extract_city(address: Optional[str], zip_code: Optional[str]) -> Optional[str]:
    """Text after the zip code: "9 Rue de la Paix 75001 Paris" -> "Paris"."""
    index = _zip_index(address, zip_code)
    if index == -1:
        return None
    return address[index + len(zip_code):].strip() or None


def split_address(address: Optional[str], zip_code: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    return extract_street(address, zip_code), extract_city(address, zip_code)
