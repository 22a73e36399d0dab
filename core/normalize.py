"""
normalize.py — Filename & Query Normalization
----------------------------------------------

Converts raw filenames, image paths, keywords and user queries into the
canonical lookup form shared by the keyword index, the image manifests and the
detail dataset:

- Diacritics removed (NFD decomposition, combining marks dropped)
- Lower-cased
- Underscore/hyphen runs replaced by a single space, whitespace collapsed
- Known image extensions (.jpg, .jpeg, .png) stripped

`normalize` is idempotent: normalize(normalize(s)) == normalize(s).

Project: Field Guide
"""

import re
import unicodedata

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png")

_EXTENSION_RE = re.compile(r"(?:\.(?:%s))+$" % "|".join(IMAGE_EXTENSIONS), re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[_\-]+")
_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_SPLIT_RE = re.compile(r"[\W_]+")


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def strip_extension(text: str) -> str:
    """
    Remove trailing image extensions until none remain.
    """
    while True:
        stripped = _EXTENSION_RE.sub("", text).strip()
        if stripped == text:
            return stripped
        text = stripped


def unify_separators(text: str) -> str:
    text = _SEPARATOR_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize(value) -> str:
    """
    Normalize a filename, keyword or query into its canonical lookup key.

    Args:
        value (str | None): Raw text. None is treated as an empty string.

    Returns:
        str: Canonical key, e.g. "Bed_Bug.PNG" -> "bed bug".
    """
    text = "" if value is None else str(value)
    # lower() can introduce combining marks (e.g. "İ"), so fold case first
    text = strip_diacritics(text.lower())
    text = unify_separators(text)
    return strip_extension(text)


def basename(path: str) -> str:
    return re.split(r"[\\/]", path or "")[-1]


def filename_to_key(path: str) -> str:
    """
    Normalize the basename of an image path, e.g. "images/bugs/Bed_Bug.png" -> "bed bug".
    """
    return normalize(basename(path))


def tokenize(value) -> list[str]:
    """
    Split normalized text into non-empty word tokens.
    """
    return [token for token in _TOKEN_SPLIT_RE.split(normalize(value)) if token]
