"""
service.py — Search Orchestration
----------------------------------

Runs one search invocation end to end:

1. Rejects blank queries
2. Loads the keyword index through its process-scoped cache
3. Ranks catalog entries with the matcher (core.search)
4. Keeps the top results and resolves a representative image for each,
   in ranking order

Failures never propagate to the caller. They are reported through
`SearchOutcome.status`:

- INDEX_UNAVAILABLE: the keyword index could not be loaded (non-fatal notice)
- NO_RESULTS: the index loaded but nothing matched
- EMPTY_QUERY: the query was blank

`build_field_guide()` wires all collaborators from config.settings.

Project: Field Guide
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from core.catalog import KeywordIndex, Scope
from core.errors import FieldGuideError, IndexUnavailableError
from core.gallery import Gallery
from core.images import ImageResolver, ManifestStore, NullImageResolver
from core.resources import LazyResource, ResourceLocator
from core.search import DEFAULT_POLICY, MatchResult, ScoringPolicy, search

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    OK = "ok"
    EMPTY_QUERY = "empty_query"
    NO_RESULTS = "no_results"
    INDEX_UNAVAILABLE = "index_unavailable"


@dataclass(frozen=True)
class ResolvedResult:
    match: MatchResult
    image: str | None = None

    @property
    def keyword(self) -> str:
        return self.match.keyword

    @property
    def category(self):
        return self.match.category

    @property
    def score(self) -> int:
        return self.match.score

    def link_path(self, image_dir="images") -> str:
        """
        Image to open for this result; guesses `<keyword>.png` when none resolved.
        """
        if self.image:
            return self.image
        return f"{image_dir}/{self.category.folder}/{self.keyword.replace(' ', '_')}.png"


@dataclass(frozen=True)
class SearchOutcome:
    status: SearchStatus
    results: list = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.OK


def load_keyword_index(locator, location, duplicates="reject") -> KeywordIndex:
    """
    Read and parse the keyword index.

    Raises:
        IndexUnavailableError: If the file cannot be read or parsed.
    """
    try:
        _, text = locator.fetch_text([location])
    except FieldGuideError as e:
        raise IndexUnavailableError(f"Could not load keyword index: {e}") from e
    try:
        index = KeywordIndex.from_json(text, duplicates=duplicates)
    except ValueError as e:
        raise IndexUnavailableError(str(e)) from e
    logger.info("Loaded keyword index with %d entries", len(index))
    return index


class SearchService:
    """
    Search entry point used by the presenter.

    Args:
        index_cache (LazyResource): Yields the KeywordIndex.
        resolver (ImageResolver | None): Resolves result images; none by default.
        policy (ScoringPolicy): Ranking constants.
        max_results (int | None): Number of ranked results kept (None keeps all).
    """
    def __init__(self, index_cache, resolver=None, policy=DEFAULT_POLICY, max_results=40):
        self.index_cache = index_cache
        self.resolver = resolver or NullImageResolver()
        self.policy = policy
        self.max_results = max_results

    def run(self, query, scope=Scope.ALL) -> SearchOutcome:
        if not (query or "").strip():
            return SearchOutcome(SearchStatus.EMPTY_QUERY, message="Enter a search term")

        try:
            index = self.index_cache.get()
        except FieldGuideError as e:
            logger.warning("Search index not available: %s", e)
            return SearchOutcome(SearchStatus.INDEX_UNAVAILABLE, message="Search index not available")

        matches = search(query, scope, index, self.policy)
        if self.max_results is not None:
            matches = matches[:self.max_results]
        if not matches:
            return SearchOutcome(SearchStatus.NO_RESULTS, message="No results found.")

        results = [ResolvedResult(match, self.resolver.resolve(match.keyword, match.category)) for match in matches]
        logger.debug("Query %r in %s -> %d result(s)", query, scope, len(results))
        return SearchOutcome(SearchStatus.OK, results=results)


class FieldGuide:
    """
    Container for the process-scoped collaborators of the app.
    """
    def __init__(self, locator, index_cache, detail_cache, manifests, search_service, gallery, image_dir="images"):
        self.locator = locator
        self.index_cache = index_cache
        self.detail_cache = detail_cache
        self.manifests = manifests
        self.search_service = search_service
        self.gallery = gallery
        self.image_dir = image_dir

    def reload(self):
        """
        Drop cached index, detail data and manifests.
        """
        self.index_cache.reload()
        self.detail_cache.reload()
        self.manifests.reload()


def policy_from_settings(settings) -> ScoringPolicy:
    return ScoringPolicy(
        keyword_score=settings.KEYWORD_SCORE,
        alias_score=settings.ALIAS_SCORE,
        token_weight=settings.TOKEN_WEIGHT,
        distance_weight=settings.DISTANCE_WEIGHT,
        max_token_distance=settings.MAX_TOKEN_DISTANCE
    )


def build_field_guide(settings=None, refresher=None, session=None) -> FieldGuide:
    """
    Wire locator, caches, resolver, search service and gallery from settings.
    """
    if settings is None:
        from config import settings

    locator = ResourceLocator(
        base_dir=settings.ASSET_ROOT,
        base_url=settings.ASSET_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        headers=settings.HEADERS,
        session=session
    )
    index_cache = LazyResource(
        lambda: load_keyword_index(locator, settings.KEYWORD_INDEX_PATH, settings.DUPLICATE_KEYWORDS),
        name="keyword index"
    )
    detail_cache = LazyResource(
        lambda: locator.fetch_json([settings.DETAIL_DATA_PATH], validate=lambda v: isinstance(v, dict)),
        name="detail dataset"
    )
    manifests = ManifestStore(locator, settings.MANIFEST_CANDIDATES)
    service = SearchService(
        index_cache,
        resolver=ImageResolver(manifests),
        policy=policy_from_settings(settings),
        max_results=settings.MAX_RESULTS
    )
    gallery = Gallery(manifests, refresher=refresher, image_dir=settings.IMAGE_DIR)
    return FieldGuide(locator, index_cache, detail_cache, manifests, service, gallery, image_dir=settings.IMAGE_DIR)
