"""
manifest_builder.py — Category Manifest Generator
--------------------------------------------------

Scans `images/<category>/` under the asset root and writes the category
manifest (`images/<category>/manifest.json`): a JSON array of the top-level
image paths, sorted case-insensitively.

Used in two ways:
- As the gallery's manifest refresher, rebuilding a manifest when a category
  gallery is opened
- From the command line:  python -m tools.manifest_builder bugs animals plants

Project: Field Guide
"""

import argparse
import json
import logging
from pathlib import Path

from core.catalog import Category
from core.images import category_folder
from core.normalize import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


class ManifestBuilder:
    """
    Build and write category manifests from the image folders on disk.

    Args:
        asset_root (str | Path): Directory containing the images folder.
        image_dir (str): Images folder name relative to the asset root.
    """
    def __init__(self, asset_root, image_dir="images"):
        self.asset_root = Path(asset_root)
        self.image_dir = image_dir

    def folder(self, category) -> Path:
        return self.asset_root / self.image_dir / category_folder(category)

    def manifest_path(self, category) -> Path:
        return self.folder(category) / "manifest.json"

    def build(self, category) -> list[str]:
        """
        List top-level image files of a category as asset-relative paths.
        """
        folder = self.folder(category)
        if not folder.is_dir():
            return []
        name = category_folder(category)
        files = [
            f for f in folder.iterdir()
            if f.is_file() and f.suffix.lower().lstrip(".") in IMAGE_EXTENSIONS
        ]
        return [f"{self.image_dir}/{name}/{f.name}" for f in sorted(files, key=lambda f: f.name.lower())]

    def write(self, category) -> Path | None:
        """
        Write the manifest for a category. Returns its path, or None if the folder is missing.
        """
        folder = self.folder(category)
        if not folder.is_dir():
            logger.warning("Image folder not found: %s", folder)
            return None
        files = self.build(category)
        path = self.manifest_path(category)
        path.write_text(json.dumps(files, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %d entries to %s", len(files), path)
        return path

    def refresh(self, category) -> bool:
        try:
            return self.write(category) is not None
        except OSError as e:
            logger.warning("Could not write manifest for %s: %s", category_folder(category), e)
            return False


def main(argv=None):
    from config.settings import ASSET_ROOT, IMAGE_DIR

    parser = argparse.ArgumentParser(description="Generate category image manifests.")
    parser.add_argument(
        "categories",
        nargs="*",
        default=[c.value for c in Category],
        help="Categories to index (default: all)"
    )
    parser.add_argument("--root", default=str(ASSET_ROOT), help="Asset root directory")
    args = parser.parse_args(argv)

    builder = ManifestBuilder(args.root, image_dir=IMAGE_DIR)
    written = 0
    for name in args.categories:
        category = Category.parse(name)
        if category is None:
            print(f"❌ Unknown category: {name}")
            continue
        path = builder.write(category)
        if path:
            print(f"✅ {category.value}: {path}")
            written += 1
        else:
            print(f"❌ {category.value}: image folder not found")
    return 0 if written else 1


if __name__ == "__main__":
    raise SystemExit(main())
