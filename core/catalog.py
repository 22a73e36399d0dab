"""
catalog.py — Keyword Index Model & Loader
------------------------------------------

This module defines the in-memory keyword index used by the search subsystem.

The index file is a JSON object keyed by canonical keyword:

    {
        "bed bug": {"class": "Bugs", "OtherKeywords": ["bites", "itchy welts"]},
        "raccoon": {"class": "Animals", "OtherKeywords": ["masked", "trash panda"]}
    }

Features:
- Immutable `KeywordEntry` records with parsed `Category`
- Insertion order preserved (ranking ties depend on it)
- Duplicate keywords rejected, or resolved last-wins for compatibility
- Malformed entries skipped with a warning instead of failing the load

Project: Field Guide
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum

from core.errors import DuplicateKeywordError, IndexUnavailableError
from core.normalize import normalize

logger = logging.getLogger(__name__)

REJECT = "reject"
LAST_WINS = "last_wins"
DUPLICATE_POLICIES = (REJECT, LAST_WINS)


class Category(Enum):
    BUGS = "Bugs"
    ANIMALS = "Animals"
    PLANTS = "Plants"

    @classmethod
    def parse(cls, value):
        """
        Parse a category name case-insensitively. Returns None if unknown.
        """
        text = normalize(value)
        for member in cls:
            if member.value.lower() == text:
                return member
        return None

    @property
    def folder(self) -> str:
        return self.value.lower()


class Scope(Enum):
    ALL = "All"
    BUGS = "Bugs"
    ANIMALS = "Animals"
    PLANTS = "Plants"

    @classmethod
    def parse(cls, value):
        """
        Parse a scope name case-insensitively. Returns None if unknown.
        """
        if isinstance(value, cls):
            return value
        text = normalize(value)
        for member in cls:
            if member.value.lower() == text:
                return member
        return None

    def includes(self, category: Category) -> bool:
        return self is Scope.ALL or self.value == category.value


@dataclass(frozen=True)
class KeywordEntry:
    """
    A single catalog entry: canonical keyword, its category and alternate search terms.
    """
    keyword: str
    category: Category
    aliases: tuple = ()


class KeywordIndex:
    """
    Read-only mapping of keyword -> KeywordEntry in load order.

    Args:
        entries (Iterable[KeywordEntry]): Entries in load order.
        duplicates (str): "reject" raises DuplicateKeywordError on a repeated
            keyword, "last_wins" keeps the last value at the first position.
    """
    def __init__(self, entries=(), duplicates=REJECT):
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate keyword policy: {duplicates}")
        self._entries = {}
        # normalized keyword -> stored keyword
        self._canonical = {}
        for entry in entries:
            self._add(entry, duplicates)

    def _add(self, entry, duplicates):
        key = normalize(entry.keyword)
        existing = self._canonical.get(key)
        if existing is not None:
            if duplicates == REJECT:
                raise DuplicateKeywordError(key, existing, entry.keyword)
            logger.warning("Duplicate keyword '%s'; keeping last definition", key)
            self._entries[existing] = KeywordEntry(existing, entry.category, entry.aliases)
            return
        self._canonical[key] = entry.keyword
        self._entries[entry.keyword] = entry

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def __contains__(self, keyword):
        return normalize(keyword) in self._canonical

    def get(self, keyword):
        stored = self._canonical.get(normalize(keyword))
        return self._entries.get(stored) if stored is not None else None

    def keywords(self) -> list[str]:
        return list(self._entries)

    def in_scope(self, scope) -> list[KeywordEntry]:
        """
        Entries whose category falls within `scope`, in load order.
        An unknown scope yields no entries.
        """
        parsed = Scope.parse(scope)
        if parsed is None:
            return []
        return [entry for entry in self._entries.values() if parsed.includes(entry.category)]

    @classmethod
    def from_pairs(cls, pairs, duplicates=REJECT):
        """
        Build an index from (keyword, raw_entry) pairs as decoded from JSON.
        """
        entries = []
        for keyword, raw in pairs:
            entry = parse_entry(keyword, raw)
            if entry is not None:
                entries.append(entry)
        return cls(entries, duplicates=duplicates)

    @classmethod
    def from_json(cls, text, duplicates=REJECT):
        """
        Parse the keyword index JSON document.

        Raises:
            IndexUnavailableError: If the document is not a JSON object.
            DuplicateKeywordError: On a repeated keyword under the "reject" policy.
        """
        try:
            pairs = json.loads(text, object_pairs_hook=_ordered_pairs)
        except ValueError as e:
            raise IndexUnavailableError(f"Keyword index is not valid JSON: {e}") from e
        if not isinstance(pairs, _PairList):
            raise IndexUnavailableError("Keyword index must be a JSON object")
        return cls.from_pairs(pairs, duplicates=duplicates)


class _PairList(list):
    """Marks a decoded JSON object so it can be told apart from a JSON array."""


def _ordered_pairs(pairs):
    # Keep raw pairs so repeated object keys are visible to the duplicate check
    return _PairList(pairs)


def _as_dict(raw):
    if isinstance(raw, _PairList):
        return dict(raw)
    return raw


def parse_entry(keyword, raw):
    """
    Convert one raw index value into a KeywordEntry, or None if it is unusable.
    """
    raw = _as_dict(raw)
    if not isinstance(raw, dict):
        logger.warning("Skipping keyword '%s': entry is not an object", keyword)
        return None

    category = Category.parse(raw.get("class"))
    if category is None:
        logger.warning("Skipping keyword '%s': unknown class %r", keyword, raw.get("class"))
        return None

    aliases = raw.get("OtherKeywords") or []
    if isinstance(aliases, str):
        aliases = [aliases]
    if isinstance(aliases, _PairList) or not isinstance(aliases, list):
        logger.warning("Ignoring OtherKeywords for '%s': expected a list", keyword)
        aliases = []

    return KeywordEntry(
        keyword=str(keyword),
        category=category,
        aliases=tuple(str(alias) for alias in aliases if alias is not None)
    )
