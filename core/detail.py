"""
detail.py — Descriptive Detail Lookup
--------------------------------------

The detail dataset (`data/Biterdata.json`) holds descriptive sections for
catalog items, keyed by a human-readable name:

    {
        "Bed Bug": {
            "sections": [
                {"name": "Overview", "items": [{"title": "Appearance", "description": "..."}]}
            ]
        }
    }

Image filenames rarely match those names exactly, so a filename is tried in
several spellings against a normalized map of the dataset keys.

Project: Field Guide
"""

import logging
import re
from dataclasses import dataclass, field

from core.normalize import IMAGE_EXTENSIONS, basename, filename_to_key, normalize

logger = logging.getLogger(__name__)

NO_DETAIL_MESSAGE = "No descriptive data found for this item."

_EXTENSION_RE = re.compile(r"\.(?:%s)$" % "|".join(IMAGE_EXTENSIONS), re.IGNORECASE)


@dataclass(frozen=True)
class DetailItem:
    title: str
    paragraphs: tuple = ()


@dataclass(frozen=True)
class DetailSection:
    name: str
    items: tuple = ()


@dataclass(frozen=True)
class DetailPage:
    """
    Everything the detail view renders for one image.
    """
    heading: str
    image_path: str
    key: str | None = None
    sections: tuple = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.key is not None


def split_paragraphs(description) -> tuple:
    parts = re.split(r"\r?\n", str(description or ""))
    return tuple(part.strip() for part in parts if part.strip())


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def candidate_keys(filename: str) -> list[str]:
    """
    Spellings of a filename to try against the dataset, most literal first.
    """
    raw = _EXTENSION_RE.sub("", basename(filename))
    raw_lower = raw.strip().lower()
    key = filename_to_key(filename)

    candidates = [
        raw_lower,
        _squash(re.sub(r"[_\-]+", " ", raw_lower)),
        key,
        re.sub(r"\s+", "", raw_lower),
        _squash(re.sub(r"[^\w\s]", "", raw_lower)),
        _squash(re.sub(r"[^\w\s]", "", key)),
    ]

    seen = set()
    unique = []
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.add(candidate)
            unique.append(candidate)
    return unique


def build_key_map(data) -> dict:
    """
    Map normalized dataset keys to their original spelling.
    """
    return {normalize(str(key).strip()): key for key in (data or {})}


def find_detail_key(filename, data):
    """
    Returns:
        str | None: Dataset key describing the image, or None.
    """
    key_map = build_key_map(data)
    tried = candidate_keys(filename)
    for candidate in tried:
        if candidate in key_map:
            logger.debug("Matched detail candidate %s -> %s", candidate, key_map[candidate])
            return key_map[candidate]
    logger.debug("No detail entry for %s (tried %s)", filename, tried)
    return None


def parse_sections(info) -> tuple:
    if not isinstance(info, dict) or not isinstance(info.get("sections"), list):
        return ()
    sections = []
    for section in info["sections"]:
        if not isinstance(section, dict):
            continue
        items = tuple(
            DetailItem(title=str(item.get("title") or ""), paragraphs=split_paragraphs(item.get("description")))
            for item in section.get("items") or []
            if isinstance(item, dict)
        )
        sections.append(DetailSection(name=str(section.get("name") or ""), items=items))
    return tuple(sections)


def build_detail_page(image_path, data) -> DetailPage:
    """
    Assemble the detail page for an image from the detail dataset.
    """
    key = find_detail_key(image_path, data)
    sections = parse_sections(data[key]) if key is not None else ()
    return DetailPage(
        heading=filename_to_key(image_path),
        image_path=image_path,
        key=key,
        sections=sections
    )
