import aiohttp
from typing import Any, Dict, Optional

from ..config import settings
from ..utils.logger import app_logger


class HttpError(Exception):
    """Raised when the upstream API answers with a non-success status."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"HTTP {self.status}: {self.message}"


class HttpClient:
    """Thin JSON client for the people/films/starships REST API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.swapi_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self.logger = app_logger.bind(component="http_client")

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={
                'Content-Type': 'application/json',
                'User-Agent': 'person-graph'
            }
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self.session:
            await self.session.close()
            self.session = None

    async def request(self, path: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """GET ``base_url + path`` and return the parsed JSON body.

        Raises:
            HttpError: if the response status is not 2xx.
        """
        if self.session is None:
            raise RuntimeError("HttpClient must be used as an async context manager")

        url = f"{self.base_url}{path}"
        self.logger.debug(f"GET {url}")

        async with self.session.get(url, headers=headers) as response:
            if not 200 <= response.status < 300:
                try:
                    text = await response.text()
                except (aiohttp.ClientError, UnicodeDecodeError):
                    text = ""
                self.logger.warning(f"GET {url} failed with status {response.status}")
                raise HttpError(response.status, text or response.reason or "")

            return await response.json(content_type=None)
