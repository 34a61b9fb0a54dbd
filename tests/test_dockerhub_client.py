"""Tests for the Docker Hub tag catalog client."""

import json
from unittest.mock import MagicMock, patch

import pytest

from config import MatrixConfig
from registry.dockerhub import fetch_all_tags, fetch_catalog, step
from registry.models import Done, Err, Failed, Fetching, Ok


def _page(names, next_url=None):
    body = {"count": 0, "next": next_url, "previous": None,
            "results": [{"name": n, "full_size": 1} for n in names]}
    return (200, {}, json.dumps(body))


@pytest.fixture
def config():
    return MatrixConfig(
        require_destination=False,
        catalog_url="https://hub.example/v2/repositories/library/postgres/tags/",
        page_size=50,
        retries=1,
        retry_delay=0,
    )


class TestStep:
    """Single pagination transitions."""

    @patch('registry.dockerhub.robust_get')
    def test_moves_to_next_page(self, mock_get, config):
        mock_get.return_value = _page(["16.2"], "https://hub.example/page2")

        state = step(Fetching(url="https://hub.example/page1"), MagicMock(), config)

        assert state == Fetching(url="https://hub.example/page2", tags=["16.2"], pages=1)

    @patch('registry.dockerhub.robust_get')
    def test_null_next_is_done(self, mock_get, config):
        mock_get.return_value = _page(["16.2", "16.3"])

        state = step(Fetching(url="u", tags=["15.1"], pages=2), MagicMock(), config)

        assert state == Done(tags=["15.1", "16.2", "16.3"], pages=3)

    @patch('registry.dockerhub.robust_get')
    def test_missing_next_is_done(self, mock_get, config):
        mock_get.return_value = (200, {}, json.dumps({"results": [{"name": "17.0"}]}))

        state = step(Fetching(url="u"), MagicMock(), config)

        assert isinstance(state, Done)
        assert state.tags == ["17.0"]

    @patch('registry.dockerhub.robust_get')
    def test_http_error_fails(self, mock_get, config):
        mock_get.return_value = (404, {}, "not found")

        state = step(Fetching(url="u"), MagicMock(), config)

        assert isinstance(state, Failed)
        assert "404" in state.reason

    @patch('registry.dockerhub.robust_get')
    def test_transport_error_fails(self, mock_get, config):
        mock_get.return_value = (0, {}, "Request failed after 1 attempts: connection error")

        state = step(Fetching(url="u"), MagicMock(), config)

        assert state == Failed(reason="Request failed after 1 attempts: connection error")

    @patch('registry.dockerhub.robust_get')
    def test_invalid_json_fails(self, mock_get, config):
        mock_get.return_value = (200, {}, "<html>")

        state = step(Fetching(url="u"), MagicMock(), config)

        assert isinstance(state, Failed)
        assert "Invalid JSON" in state.reason

    @patch('registry.dockerhub.robust_get')
    def test_malformed_results_treated_as_empty(self, mock_get, config):
        mock_get.return_value = (200, {}, json.dumps({"results": "oops", "next": None}))

        state = step(Fetching(url="u", tags=["16.1"]), MagicMock(), config)

        assert state == Done(tags=["16.1"], pages=1)

    @patch('registry.dockerhub.robust_get')
    def test_entries_without_name_skipped(self, mock_get, config):
        body = {"results": [{"name": "16.1"}, {}, "bad", {"name": 5}, {"name": "16.2"}]}
        mock_get.return_value = (200, {}, json.dumps(body))

        state = step(Fetching(url="u"), MagicMock(), config)

        assert state.tags == ["16.1", "16.2"]

    @patch('registry.dockerhub.robust_get')
    def test_passes_timeout_and_retry_settings(self, mock_get):
        cfg = MatrixConfig(require_destination=False, timeout=7, retries=4, retry_delay=0.5)
        mock_get.return_value = _page([])
        session = MagicMock()

        step(Fetching(url="u"), session, cfg)

        mock_get.assert_called_once_with(
            "u", session=session, timeout=7.0, retries=4, retry_delay=0.5
        )


class TestFetchCatalog:
    """Full pagination walk."""

    @patch('registry.dockerhub.robust_get')
    def test_concatenates_pages_in_order(self, mock_get, config):
        mock_get.side_effect = [
            _page(["18.0", "17.6"], "https://hub.example/p2"),
            _page(["16.10", "16.2"], "https://hub.example/p3"),
            _page(["15.8"], None),
        ]

        result = fetch_catalog(config)

        assert result == Ok(tags=["18.0", "17.6", "16.10", "16.2", "15.8"])
        assert mock_get.call_count == 3
        urls = [c.args[0] for c in mock_get.call_args_list]
        assert urls == [
            "https://hub.example/v2/repositories/library/postgres/tags/?page_size=50",
            "https://hub.example/p2",
            "https://hub.example/p3",
        ]

    @patch('registry.dockerhub.robust_get')
    def test_keeps_duplicates(self, mock_get, config):
        mock_get.side_effect = [_page(["16.2"], "p2"), _page(["16.2"])]

        assert fetch_catalog(config) == Ok(tags=["16.2", "16.2"])

    @patch('registry.dockerhub.robust_get')
    def test_failure_on_later_page_discards_partial_list(self, mock_get, config):
        mock_get.side_effect = [
            _page(["18.0"], "p2"),
            (503, {}, "unavailable"),
        ]

        result = fetch_catalog(config)

        assert isinstance(result, Err)
        assert "503" in result.reason

    @patch('registry.dockerhub.robust_get')
    def test_empty_catalog_is_ok(self, mock_get, config):
        mock_get.return_value = _page([])

        assert fetch_catalog(config) == Ok(tags=[])

    @patch('registry.dockerhub.robust_get')
    def test_default_config_uses_docker_hub(self, mock_get):
        mock_get.return_value = _page([])

        fetch_catalog()

        assert mock_get.call_args.args[0] == (
            "https://hub.docker.com/v2/repositories/library/postgres/tags/?page_size=100"
        )


class TestFetchAllTags:
    """Best-effort list variant."""

    @patch('registry.dockerhub.robust_get')
    def test_returns_tags(self, mock_get, config):
        mock_get.return_value = _page(["16.2", "latest"])

        assert fetch_all_tags(config) == ["16.2", "latest"]

    @patch('registry.dockerhub.robust_get')
    def test_returns_empty_on_failure(self, mock_get, config):
        mock_get.side_effect = [_page(["16.2"], "p2"), (500, {}, "boom")]

        assert fetch_all_tags(config) == []
