"""
Remote meta fetcher tests

Served from a local HTTP server; content is appended verbatim.
"""

import pytest

from rayonix.config import AppSettings
from rayonix.lib.errors import MetaFetchError
from rayonix.lib.fetcher import MetaFetcher


class TestMetaFetch:

    def test_lines_appended(self, http_server):
        http_server["routes"]["/lib.bas"] = b"L1\r\nL2\r\n"
        buffer = ["before"]
        result = MetaFetcher(AppSettings()).meta_fetch(http_server["url"] + "/lib.bas", buffer)
        assert result is buffer
        assert buffer == ["before", "L1", "L2", ""]

    def test_directives_not_rescanned(self, http_server):
        """Fetched directive lines are ordinary text"""
        http_server["routes"]["/lib.bas"] = b"'!rayonix import nothing.bas\nX"
        buffer = MetaFetcher(AppSettings()).meta_fetch(http_server["url"] + "/lib.bas", [])
        assert buffer == ["'!rayonix import nothing.bas", "X"]

    def test_not_found_is_fatal(self, http_server):
        url = http_server["url"] + "/missing.bas"
        with pytest.raises(MetaFetchError) as excinfo:
            MetaFetcher(AppSettings()).meta_fetch(url, [])
        assert excinfo.value.url == url
        assert "404" in excinfo.value.reason

    def test_connection_refused_is_fatal(self):
        fetcher = MetaFetcher(AppSettings(http_timeout=5))
        with pytest.raises(MetaFetchError):
            fetcher.meta_fetch("http://127.0.0.1:1/x.bas", [])

    def test_malformed_url_is_fatal(self):
        with pytest.raises(MetaFetchError):
            MetaFetcher(AppSettings()).meta_fetch("not a url", [])

    def test_user_agent_sent(self, monkeypatch):
        seen = {}

        class FakeResponse:
            status = 200

            def read(self):
                return b"ok"

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

        def fake_urlopen(request, **kwargs):
            seen["ua"] = request.get_header("User-agent")
            seen["kwargs"] = kwargs
            return FakeResponse()

        monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
        fetcher = MetaFetcher(AppSettings(user_agent="rayonix-test"))
        assert fetcher.meta_fetch("http://example.invalid/a.bas", []) == ["ok"]
        assert seen["ua"] == "rayonix-test"
        assert seen["kwargs"] == {}

    @pytest.mark.parametrize("url", [
        "data:,hello",
        "file:///etc/hostname",
        "ftp://example.com/a.bas",
    ])
    def test_non_http_scheme_is_fatal(self, url):
        """Only http and https are fetched; local files are never read"""
        with pytest.raises(MetaFetchError) as excinfo:
            MetaFetcher(AppSettings()).meta_fetch(url, [])
        assert "unsupported scheme" in excinfo.value.reason
