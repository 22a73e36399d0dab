"""Tests for the resource locator and lazy cache."""

from __future__ import annotations

import json
from pathlib import Path
from unittest import mock

import pytest
import requests

from core.errors import ResourceUnavailableError
from core.resources import LazyResource, ResourceLocator, relative_part


def test_relative_part() -> None:
    assert relative_part("./images/x.json") == "images/x.json"
    assert relative_part("/images/x.json") == "images/x.json"
    assert relative_part("images/x.json") == "images/x.json"


def test_first_readable_candidate_wins(tmp_path: Path) -> None:
    (tmp_path / "b.json").write_text(json.dumps({"from": "b"}), encoding="utf-8")
    (tmp_path / "c.json").write_text(json.dumps({"from": "c"}), encoding="utf-8")
    locator = ResourceLocator(base_dir=tmp_path)

    assert locator.fetch_json(["a.json", "./b.json", "c.json"]) == {"from": "b"}


def test_invalid_json_and_rejected_values_fall_through(tmp_path: Path) -> None:
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "object.json").write_text("{}", encoding="utf-8")
    (tmp_path / "list.json").write_text('["x"]', encoding="utf-8")
    locator = ResourceLocator(base_dir=tmp_path)

    value = locator.fetch_json(
        ["bad.json", "object.json", "list.json"],
        validate=lambda v: isinstance(v, list),
    )

    assert value == ["x"]


def test_all_candidates_fail(tmp_path: Path) -> None:
    locator = ResourceLocator(base_dir=tmp_path)

    with pytest.raises(ResourceUnavailableError) as excinfo:
        locator.fetch_text(["a.json", "b.json"])

    assert excinfo.value.locations == ["a.json", "b.json"]
    assert len(excinfo.value.reasons) == 2
    assert locator.load_json(["a.json"], default=[]) == []


def test_http_candidate_uses_session() -> None:
    session = mock.Mock()
    session.get.return_value = mock.Mock(text='{"a": 1}')
    locator = ResourceLocator(
        base_url="http://example.test/guide",
        timeout=3.0,
        headers={"User-Agent": "test"},
        session=session,
    )

    assert locator.fetch_json(["./data/index.json"]) == {"a": 1}
    session.get.assert_called_once_with(
        "http://example.test/guide/data/index.json",
        headers={"User-Agent": "test"},
        timeout=3.0,
    )


def test_http_failure_falls_back_to_default() -> None:
    locator = ResourceLocator(base_url="http://example.test/")

    with mock.patch("core.resources.requests.get", side_effect=requests.ConnectionError("down")):
        assert locator.load_json(["images/bugs/manifest.json"], default=[]) == []


def test_http_status_error_is_a_miss() -> None:
    response = mock.Mock()
    response.raise_for_status.side_effect = requests.HTTPError("404")
    locator = ResourceLocator()

    with mock.patch("core.resources.requests.get", return_value=response):
        with pytest.raises(ResourceUnavailableError):
            locator.fetch_json(["https://example.test/missing.json"])


def test_lazy_resource_loads_once_until_reload() -> None:
    loader = mock.Mock(side_effect=[1, 2])
    resource = LazyResource(loader, name="numbers")

    assert not resource.loaded
    assert resource.get() == 1
    assert resource.get() == 1
    resource.reload()
    assert resource.get() == 2
    assert loader.call_count == 2


def test_lazy_resource_does_not_cache_failures() -> None:
    loader = mock.Mock(side_effect=[ResourceUnavailableError([], []), "ok"])
    resource = LazyResource(loader)

    with pytest.raises(ResourceUnavailableError):
        resource.get()
    assert resource.get() == "ok"


def test_undecodable_file_falls_through(tmp_path: Path) -> None:
    (tmp_path / "latin1.json").write_bytes(b'{"caf\xe9": 1}')
    (tmp_path / "utf8.json").write_text('{"ok": 1}', encoding="utf-8")
    locator = ResourceLocator(base_dir=tmp_path)

    assert locator.fetch_text(["latin1.json", "utf8.json"]) == ("utf8.json", '{"ok": 1}')
    with pytest.raises(ResourceUnavailableError):
        locator.fetch_text(["latin1.json"])
