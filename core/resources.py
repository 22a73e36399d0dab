"""
resources.py — Resource Location & Process-Scoped Caching
----------------------------------------------------------

Data files (keyword index, detail dataset, image manifests) may live on disk
under the asset root or be served over HTTP. A `ResourceLocator` tries an
ordered list of candidate locations until one yields valid JSON; a
`LazyResource` loads a value on first use and holds it until `reload()`.

Features:
- Filesystem paths resolved against a base directory
- HTTP(S) locations fetched with `requests`
- Per-candidate failures logged, all-failed reported as ResourceUnavailableError
- Documented default returned by `load_json` when every candidate fails

Project: Field Guide
"""

import json
import logging
from pathlib import Path
from urllib.parse import urljoin

import requests

from core.errors import ResourceUnavailableError

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def relative_part(location: str) -> str:
    """
    Strip leading "./" and "/" so a location can be joined onto a base.
    """
    while location.startswith(("./", "/")):
        location = location[2:] if location.startswith("./") else location[1:]
    return location


class ResourceLocator:
    """
    Resolve and read resources from an ordered list of candidate locations.

    Args:
        base_dir (str | Path | None): Directory relative paths are resolved against.
        base_url (str | None): When set, relative locations are fetched from this URL.
        timeout (float): HTTP timeout in seconds.
        headers (dict | None): HTTP headers (User-Agent).
        session (requests.Session | None): Optional session for HTTP reuse.
    """
    def __init__(self, base_dir=None, base_url=None, timeout=10.0, headers=None, session=None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.base_url = base_url.rstrip("/") + "/" if base_url else None
        self.timeout = timeout
        self.headers = headers or {}
        self.session = session

    def resolve(self, location: str) -> str:
        """
        Turn a candidate location into an absolute URL or filesystem path.
        """
        if is_url(location):
            return location
        if self.base_url:
            return urljoin(self.base_url, relative_part(location))
        path = Path(location)
        if path.is_absolute() and path.exists():
            return str(path)
        return str(self.base_dir / relative_part(location))

    def read_text(self, location: str) -> str:
        target = self.resolve(location)
        if is_url(target):
            getter = self.session.get if self.session is not None else requests.get
            resp = getter(target, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
            return resp.text
        return Path(target).read_text(encoding="utf-8")

    def fetch_text(self, candidates) -> tuple[str, str]:
        """
        Read the first candidate that can be retrieved.

        Returns:
            tuple[str, str]: (location, text) of the first success.

        Raises:
            ResourceUnavailableError: If every candidate failed.
        """
        candidates = list(candidates)
        reasons = []
        for location in candidates:
            try:
                return location, self.read_text(location)
            except (OSError, requests.RequestException, ValueError) as e:
                reasons.append(f"{location}: {e}")
                logger.debug("Could not read %s: %s", location, e)
        raise ResourceUnavailableError(candidates, reasons)

    def fetch_json(self, candidates, validate=None):
        """
        Decode the first candidate that holds valid JSON.

        Args:
            candidates (Iterable[str]): Locations in priority order.
            validate (Callable[[object], bool] | None): Extra check on the decoded
                value; a rejected value moves on to the next candidate.

        Raises:
            ResourceUnavailableError: If no candidate produced acceptable JSON.
        """
        candidates = list(candidates)
        reasons = []
        for location in candidates:
            try:
                value = json.loads(self.read_text(location))
            except (OSError, requests.RequestException, ValueError) as e:
                reasons.append(f"{location}: {e}")
                logger.debug("Could not load JSON from %s: %s", location, e)
                continue
            if validate is not None and not validate(value):
                reasons.append(f"{location}: unexpected content")
                logger.debug("Rejected content of %s", location)
                continue
            return value
        raise ResourceUnavailableError(candidates, reasons)

    def load_json(self, candidates, default=None, validate=None):
        """
        Like `fetch_json`, but return `default` when every candidate fails.
        """
        try:
            return self.fetch_json(candidates, validate=validate)
        except ResourceUnavailableError as e:
            logger.debug("Falling back to default: %s", e)
            return default


class LazyResource:
    """
    Load a value on first access and hold it until `reload()` is called.
    Failed loads are not cached, so the next `get()` tries again.

    Args:
        loader (Callable[[], T]): Produces the value; may raise.
        name (str): Label used in log messages.
    """
    _UNSET = object()

    def __init__(self, loader, name="resource"):
        self._loader = loader
        self.name = name
        self._value = self._UNSET

    @property
    def loaded(self) -> bool:
        return self._value is not self._UNSET

    def get(self):
        if self._value is self._UNSET:
            logger.info("Loading %s", self.name)
            self._value = self._loader()
        return self._value

    def reload(self):
        """
        Drop the held value; the next `get()` loads it again.
        """
        self._value = self._UNSET

    def set(self, value):
        self._value = value
