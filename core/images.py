"""
images.py — Category Manifests & Image Resolution
--------------------------------------------------

Each category keeps a flat manifest of image paths at
`images/<category>/manifest.json`. This module loads those manifests and maps
a matched keyword to a representative image by comparing normalized
basenames.

Missing or malformed manifests are never an error: they resolve to an empty
list and every lookup returns None.

Project: Field Guide
"""

import logging

from core.catalog import Category
from core.normalize import filename_to_key, normalize
from core.resources import LazyResource

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_CANDIDATES = ("images/{category}/manifest.json",)


def coerce_manifest(value) -> list[str]:
    """
    Turn decoded manifest JSON into a list of path strings.

    Accepts a JSON array, a single path string, an object holding a `files`
    or `paths` array, or any other object whose string values are paths.
    """
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return [value]
    if isinstance(value, dict):
        for key in ("files", "paths"):
            if isinstance(value.get(key), list):
                return coerce_manifest(value[key])
        paths = []
        for item in value.values():
            if isinstance(item, list):
                paths.extend(p for p in item if isinstance(p, str))
            elif isinstance(item, str):
                paths.append(item)
        return paths
    return []


def category_folder(category) -> str:
    parsed = Category.parse(category) if not isinstance(category, Category) else category
    return parsed.folder if parsed is not None else normalize(category)


class ManifestStore:
    """
    Per-category manifest cache backed by a ResourceLocator.

    Args:
        locator (ResourceLocator): Reads manifest files.
        candidates (Iterable[str]): Location templates containing `{category}`.
    """
    def __init__(self, locator, candidates=DEFAULT_MANIFEST_CANDIDATES):
        self.locator = locator
        self.candidates = tuple(candidates)
        self._manifests = {}

    def locations(self, category) -> list[str]:
        folder = category_folder(category)
        return [template.format(category=folder) for template in self.candidates]

    def _load(self, category):
        value = self.locator.load_json(self.locations(category), default=[])
        files = coerce_manifest(value)
        logger.debug("Manifest for %s lists %d file(s)", category_folder(category), len(files))
        return files

    def _resource(self, category):
        folder = category_folder(category)
        if folder not in self._manifests:
            self._manifests[folder] = LazyResource(lambda: self._load(folder), name=f"{folder} manifest")
        return self._manifests[folder]

    def get(self, category) -> list[str]:
        return self._resource(category).get()

    def reload(self, category=None):
        """
        Forget a cached manifest (or all of them) so the next lookup re-reads it.
        """
        if category is None:
            for resource in self._manifests.values():
                resource.reload()
        else:
            self._resource(category).reload()


class ImageResolver:
    """
    Find the manifest image whose normalized basename equals a keyword.
    """
    def __init__(self, manifests):
        self.manifests = manifests

    def resolve(self, keyword, category):
        """
        Args:
            keyword (str): Matched catalog keyword.
            category (Category | str): Category whose manifest is scanned.

        Returns:
            str | None: First matching manifest path, or None.
        """
        target = normalize(keyword)
        for path in self.manifests.get(category):
            if filename_to_key(path) == target:
                return path
        return None


class NullImageResolver:
    """Resolver used when no manifests are available; never finds an image."""

    def resolve(self, keyword, category):
        return None
