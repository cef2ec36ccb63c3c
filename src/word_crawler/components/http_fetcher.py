"""
HTTP Fetcher - Downloads pages and robots.txt files.
Each worker thread gets its own pooled requests.Session.
"""

import logging
import time
import threading
from typing import Dict
from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException, Timeout

from ..errors import FetchError


@dataclass
class FetchConfig:
    """Configuration for the HTTP fetcher."""
    timeout_seconds: float = 30
    verify_ssl: bool = True
    user_agent: str = "WordCrawler/1.0"
    max_content_size_mb: int = 10  # Skip pages larger than this

    # Request headers
    accept_language: str = "en-US,en;q=0.9"
    accept_encoding: str = "gzip, deflate"

    # Connection pooling
    pool_connections: int = 10
    pool_maxsize: int = 20


class SessionManager:
    """Keeps one requests.Session per thread."""

    def __init__(self, config: FetchConfig):
        self.config = config
        self.sessions: Dict[int, requests.Session] = {}
        self.lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_session(self) -> requests.Session:
        thread_id = threading.get_ident()
        with self.lock:
            if thread_id not in self.sessions:
                self.logger.debug(f"Creating session for thread {thread_id}")
                self.sessions[thread_id] = self._create_session()
            return self.sessions[thread_id]

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=self.config.pool_connections,
                              pool_maxsize=self.config.pool_maxsize)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': self.config.accept_language,
            'Accept-Encoding': self.config.accept_encoding,
            'Connection': 'keep-alive',
        })
        return session

    def close_all(self):
        with self.lock:
            for session in self.sessions.values():
                session.close()
            self.sessions.clear()


class HTTPFetcher:
    """
    Fetches a URL and returns the decoded body text.

    Any transport failure, non-2xx status or oversized body raises
    FetchError. There is no retry: a failed page is skipped by the caller.
    """

    def __init__(self, config: FetchConfig = None, session_manager: SessionManager = None):
        self.config = config or FetchConfig()
        self.session_manager = session_manager or SessionManager(self.config)
        self.logger = logging.getLogger(self.__class__.__name__)

    def fetch(self, url: str) -> str:
        """
        Download url and return its body as text.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response body decoded as text

        Raises:
            FetchError: On transport failure, bad status, or size limit
        """
        session = self.session_manager.get_session()
        start_time = time.time()
        max_bytes = self.config.max_content_size_mb * 1024 * 1024

        try:
            response = session.get(
                url, timeout=self.config.timeout_seconds,
                allow_redirects=True, verify=self.config.verify_ssl, stream=True
            )
        except Timeout as e:
            raise FetchError(url, f"Timeout after {self.config.timeout_seconds}s") from e
        except RequestException as e:
            raise FetchError(url, f"Request Error: {e}") from e

        try:
            if not 200 <= response.status_code < 300:
                raise FetchError(url, f"HTTP {response.status_code}",
                                 status_code=response.status_code)

            content_length = response.headers.get('Content-Length')
            if content_length and content_length.isdigit() and int(content_length) > max_bytes:
                raise FetchError(url, "Content too large", status_code=response.status_code)

            content = b''
            for chunk in response.iter_content(chunk_size=8192):
                content += chunk
                if len(content) > max_bytes:
                    raise FetchError(url, "Content exceeded size limit",
                                     status_code=response.status_code)
        except RequestException as e:
            raise FetchError(url, f"Request Error: {e}") from e
        finally:
            response.close()

        elapsed = time.time() - start_time
        self.logger.debug(f"Fetched: {url} ({len(content)}b, {elapsed:.2f}s)")
        return self._decode(content, self._declared_encoding(response))

    @staticmethod
    def _declared_encoding(response):
        # requests reports ISO-8859-1 for text/* without a charset; only trust an explicit one
        content_type = response.headers.get('Content-Type', '')
        if 'charset' in content_type.lower():
            return response.encoding
        return 'utf-8'

    @staticmethod
    def _decode(content: bytes, encoding) -> str:
        try:
            return content.decode(encoding or 'utf-8', errors='replace')
        except LookupError:
            return content.decode('utf-8', errors='replace')

    def close(self):
        """Release all pooled sessions."""
        self.session_manager.close_all()
