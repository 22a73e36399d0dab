"""Tests for manifest loading and image resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.catalog import Category
from core.images import ImageResolver, ManifestStore, NullImageResolver, coerce_manifest
from core.resources import ResourceLocator


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (["a.png", 3, "b.png"], ["a.png", "b.png"]),
        ("images/animals/fox.png", ["images/animals/fox.png"]),
        ({"files": ["a.png"]}, ["a.png"]),
        ({"paths": ["b.png"]}, ["b.png"]),
        ({"x": "a.png", "y": ["b.png", None]}, ["a.png", "b.png"]),
        (None, []),
        (42, []),
    ],
)
def test_coerce_manifest(value, expected) -> None:
    assert coerce_manifest(value) == expected


@pytest.fixture
def resolver(asset_root: Path) -> ImageResolver:
    return ImageResolver(ManifestStore(ResourceLocator(base_dir=asset_root)))


def test_resolves_by_normalized_basename(resolver: ImageResolver) -> None:
    assert resolver.resolve("Bed Bug", Category.BUGS) == "images/bugs/Bed_Bug.png"
    assert resolver.resolve("mosquito", "bugs") == "images/bugs/mosquito.jpg"


def test_unknown_keyword_is_none(resolver: ImageResolver) -> None:
    assert resolver.resolve("wasp", Category.BUGS) is None


def test_missing_manifest_is_none(resolver: ImageResolver) -> None:
    assert resolver.resolve("poison ivy", Category.PLANTS) is None


def test_malformed_manifest_is_none(asset_root: Path, resolver: ImageResolver) -> None:
    animals = asset_root / "images" / "animals"
    animals.mkdir(parents=True)
    (animals / "manifest.json").write_text("{broken", encoding="utf-8")

    assert resolver.resolve("raccoon", Category.ANIMALS) is None


def test_later_candidate_used(asset_root: Path) -> None:
    store = ManifestStore(
        ResourceLocator(base_dir=asset_root),
        candidates=["missing/{category}.json", "./images/{category}/manifest.json"],
    )

    assert store.locations(Category.BUGS) == ["missing/bugs.json", "./images/bugs/manifest.json"]
    assert len(store.get(Category.BUGS)) == 2


def test_manifest_cached_until_reload(asset_root: Path) -> None:
    store = ManifestStore(ResourceLocator(base_dir=asset_root))
    manifest = asset_root / "images" / "bugs" / "manifest.json"

    assert len(store.get("Bugs")) == 2
    manifest.write_text(json.dumps(["images/bugs/flea.png"]), encoding="utf-8")
    assert len(store.get("Bugs")) == 2

    store.reload(Category.BUGS)
    assert store.get("Bugs") == ["images/bugs/flea.png"]


def test_null_resolver() -> None:
    assert NullImageResolver().resolve("bed bug", Category.BUGS) is None
