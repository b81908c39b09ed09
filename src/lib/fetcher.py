"""
Remote meta fetcher

Retrieves '!rayonix meta content with a single blocking HTTP GET. The
fetched text is opaque: it is split into lines and appended verbatim,
and directives inside it are never resolved.
"""

import http.client
import urllib.error
import urllib.parse
import urllib.request
from typing import Dict, List, Optional

from ..config import AppSettings, appsettings
from .errors import MetaFetchError
from .log import LOG
from .splitter import lines_split


SCHEMES = {"http", "https"}


class MetaFetcher:
    """urllib-based fetcher for meta directives; no retries"""

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings

    def body_get(self, url: str) -> bytes:
        """
        Perform the GET and return the response body

        Raises:
            MetaFetchError: non-HTTP(S) or malformed URL, transport failure,
                read failure or a non-2xx status
        """
        try:
            scheme = urllib.parse.urlsplit(url).scheme.lower()
        except ValueError as e:
            raise MetaFetchError(url, str(e)) from e
        if scheme not in SCHEMES:
            raise MetaFetchError(url, f"unsupported scheme {scheme!r}")

        headers: Dict[str, str] = {}
        if self.settings.user_agent:
            headers["User-Agent"] = self.settings.user_agent

        kwargs = {}
        if self.settings.http_timeout is not None:
            kwargs["timeout"] = self.settings.http_timeout

        try:
            request = urllib.request.Request(url, headers=headers, method="GET")
            with urllib.request.urlopen(request, **kwargs) as resp:  # nosec B310 (intended usage)
                status = resp.status
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise MetaFetchError(url, f"HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise MetaFetchError(url, str(e.reason)) from e
        except (OSError, ValueError, http.client.HTTPException) as e:
            raise MetaFetchError(url, str(e)) from e

        if not 200 <= status < 300:
            raise MetaFetchError(url, f"HTTP {status}")
        return body

    def meta_fetch(self, url: str, buffer: List[str]) -> List[str]:
        """
        Fetch url and append its lines to buffer, unscanned

        Returns:
            buffer
        """
        LOG(f"Fetching meta {url}", level=1)
        body = self.body_get(url)
        document = lines_split(body, path="", encoding=self.settings.encoding)
        LOG(f"Fetched {len(document.lines)} lines from {url}", level=2)
        buffer.extend(document.lines)
        return buffer
