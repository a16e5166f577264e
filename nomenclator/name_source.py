"""
Remote name source.

Names come from an HTTP endpoint answering GET with {"name": "<string>"}.
Uniqueness is the endpoint's responsibility: nothing here remembers which
names were handed out, so duplicates reach the store and overwrite the
earlier key.
"""
import logging

import requests

from .errors import SourceTimeout, SourceUnavailable

logger = logging.getLogger(__name__)


class RemoteNameSource:
    """Requests one name per call from a remote name service."""

    def __init__(self, url: str, timeout: float = 10.0, session: requests.Session = None):
        if not url:
            raise ValueError("name source URL is required")
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def request_name(self) -> str:
        """Fetch a single name or raise SourceUnavailable."""
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            logger.error(f"Name source timed out: {e}")
            raise SourceTimeout(self.url, self.timeout) from e
        except requests.RequestException as e:
            logger.error(f"Name source request failed: {e}")
            raise SourceUnavailable(self.url, str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailable(self.url, "response is not JSON") from e

        if not isinstance(payload, dict):
            raise SourceUnavailable(self.url, "response is not a JSON object")

        name = payload.get('name')
        if not isinstance(name, str) or not name.strip():
            raise SourceUnavailable(self.url, "response has no usable 'name' field")

        name = name.strip()
        try:
            name.encode('utf-8')
        except UnicodeEncodeError as e:
            raise SourceUnavailable(self.url, "name is not valid UTF-8") from e

        return name

    def close(self):
        self.session.close()
