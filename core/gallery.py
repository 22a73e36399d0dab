"""
gallery.py — Category Gallery Helpers
--------------------------------------

Prepares the per-category image galleries (Bugs, Animals, Plants):

- Filters a manifest to top-level images of the category folder
- Removes duplicates while preserving manifest order
- Falls back to a built-in list when the manifest is missing or empty
- Builds wrapped display names from filenames
- Lays items out in fixed-width rows

An optional `ManifestRefresher` can rebuild a category manifest whenever a
gallery is opened; the default refresher does nothing.

Project: Field Guide
"""

import logging
import re
from dataclasses import dataclass

from core.images import category_folder
from core.normalize import IMAGE_EXTENSIONS, basename

logger = logging.getLogger(__name__)

GRID_COLUMNS = 4
NAME_WIDTH = 30

FALLBACK_FILES = {
    "bugs": (
        "images/bugs/bed_bug.png",
        "images/bugs/black_widow.png",
        "images/bugs/Blister Beetle.png",
        "images/bugs/bumble bee.png",
        "images/bugs/bumble_bee.jpg",
        "images/bugs/centipede.png",
        "images/bugs/Chigger_Trombiculidae.png",
        "images/bugs/flea.png",
        "images/bugs/human_botfly.png",
        "images/bugs/mosquito.png",
        "images/bugs/Nuttallilella.png",
        "images/bugs/Trantuala.png",
        "images/bugs/wasp.png",
        "images/bugs/wheel bug.png",
    ),
    "animals": (),
    "plants": (),
}


@dataclass(frozen=True)
class GalleryItem:
    path: str
    name: str


def top_level_pattern(folder: str, image_dir: str = "images"):
    extensions = "|".join(IMAGE_EXTENSIONS)
    return re.compile(
        rf"^{re.escape(image_dir)}/{re.escape(folder)}/[^/]+\.(?:{extensions})$",
        re.IGNORECASE
    )


def filter_gallery_files(files, category, image_dir="images") -> list[str]:
    """
    Keep image files that sit directly in the category folder, first occurrence only.
    """
    pattern = top_level_pattern(category_folder(category), image_dir)
    seen = set()
    kept = []
    for path in files:
        if pattern.match(path) and path not in seen:
            seen.add(path)
            kept.append(path)
    return kept


def display_name(path: str, width: int = NAME_WIDTH) -> list[str]:
    """
    Display lines for a gallery caption.

    The extension is dropped and underscores become spaces. Names longer than
    `width` wrap at the last space before the limit, or are hard-wrapped with
    a trailing hyphen when there is no space.
    """
    name = re.sub(r"\.(?:jpg|jpeg|png)$", "", basename(path), flags=re.IGNORECASE)
    remaining = name.replace("_", " ").strip()
    if len(remaining) <= width:
        return [remaining]

    lines = []
    while remaining:
        if len(remaining) <= width:
            lines.append(remaining)
            break
        last_space = remaining[:width].rfind(" ")
        if last_space > 0:
            lines.append(remaining[:last_space])
            remaining = remaining[last_space + 1:]
        else:
            lines.append(remaining[:width - 1] + "-")
            remaining = remaining[width - 1:]
    return lines


def grid_rows(items, columns: int = GRID_COLUMNS) -> list[list]:
    """
    Split items into rows of `columns`; the last row may be shorter.
    """
    items = list(items)
    return [items[start:start + columns] for start in range(0, len(items), columns)]


class NullRefresher:
    """Default manifest refresher: leaves manifests untouched."""

    def refresh(self, category) -> bool:
        return False


class Gallery:
    """
    Gallery data for the category views.

    Args:
        manifests (ManifestStore): Source of category manifests.
        refresher (ManifestRefresher | None): Rebuilds a manifest on open.
        fallbacks (dict[str, Iterable[str]]): Built-in file lists per folder.
    """
    def __init__(self, manifests, refresher=None, fallbacks=None, image_dir="images"):
        self.manifests = manifests
        self.refresher = refresher or NullRefresher()
        self.fallbacks = FALLBACK_FILES if fallbacks is None else fallbacks
        self.image_dir = image_dir

    def open(self, category) -> list[GalleryItem]:
        """
        Refresh the category manifest (if a refresher is configured) and list its images.
        """
        if self.refresher.refresh(category):
            self.manifests.reload(category)
        return self.items(category)

    def view(self, category, previous=None) -> list[GalleryItem]:
        """
        Items for a rerun of the gallery view. The manifest is only refreshed
        when `category` differs from the previously opened one.
        """
        if previous is not None and category_folder(previous) == category_folder(category):
            return self.items(category)
        return self.open(category)

    def files(self, category) -> list[str]:
        folder = category_folder(category)
        files = self.manifests.get(category)
        if not files:
            logger.warning("Manifest for %s missing or empty; using built-in list", folder)
            files = list(self.fallbacks.get(folder, ()))
        return filter_gallery_files(files, category, self.image_dir)

    def items(self, category) -> list[GalleryItem]:
        return [GalleryItem(path=path, name="\n".join(display_name(path))) for path in self.files(category)]
