"""Shared fixtures for the field guide tests."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from core.catalog import Category, KeywordEntry, KeywordIndex

INDEX_DATA = {
    "bed bug": {"class": "Bugs", "OtherKeywords": ["bites", "itchy welts"]},
    "mosquito": {"class": "Bugs", "OtherKeywords": []},
    "flea": {"class": "Bugs", "OtherKeywords": ["bites", "pets"]},
    "raccoon": {"class": "Animals", "OtherKeywords": ["masked", "trash panda"]},
    "poison ivy": {"class": "Plants", "OtherKeywords": ["rash", "leaves of three"]},
}

DETAIL_DATA = {
    "Bed Bug": {
        "sections": [
            {
                "name": "Overview",
                "items": [
                    {"title": "Appearance", "description": "Small and flat.\nReddish-brown."},
                ],
            }
        ]
    }
}


@pytest.fixture
def index() -> KeywordIndex:
    return KeywordIndex([
        KeywordEntry("bed bug", Category.BUGS, ("bites", "itchy welts")),
        KeywordEntry("mosquito", Category.BUGS, ()),
        KeywordEntry("flea", Category.BUGS, ("bites", "pets")),
        KeywordEntry("raccoon", Category.ANIMALS, ("masked", "trash panda")),
        KeywordEntry("poison ivy", Category.PLANTS, ("rash", "leaves of three")),
    ])


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """Asset tree with index, detail dataset and a bugs manifest."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "biterdata_index.json").write_text(json.dumps(INDEX_DATA), encoding="utf-8")
    (data / "Biterdata.json").write_text(json.dumps(DETAIL_DATA), encoding="utf-8")

    bugs = tmp_path / "images" / "bugs"
    bugs.mkdir(parents=True)
    (bugs / "manifest.json").write_text(
        json.dumps(["images/bugs/Bed_Bug.png", "images/bugs/mosquito.jpg"]),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def settings(asset_root: Path) -> SimpleNamespace:
    """Stand-in for config.settings pointing at the temporary asset tree."""
    return SimpleNamespace(
        ASSET_ROOT=asset_root,
        ASSET_BASE_URL=None,
        KEYWORD_INDEX_PATH="data/biterdata_index.json",
        DETAIL_DATA_PATH="data/Biterdata.json",
        IMAGE_DIR="images",
        MANIFEST_CANDIDATES=["images/{category}/manifest.json"],
        MAX_RESULTS=40,
        DUPLICATE_KEYWORDS="reject",
        KEYWORD_SCORE=10000,
        ALIAS_SCORE=9000,
        TOKEN_WEIGHT=100,
        DISTANCE_WEIGHT=10,
        MAX_TOKEN_DISTANCE=1,
        HTTP_TIMEOUT=5.0,
        HEADERS={"User-Agent": "test"},
    )
