"""Connection setup for the backend command endpoint."""
from typing import Optional
import aiohttp
from shared.config import settings


class BackendConnection:
    """Manages the HTTP session used to reach the backend."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.timeout = timeout or settings.backend_timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def init(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Accept": "application/json"}
            )
        return self._session

    async def get_session(self) -> aiohttp.ClientSession:
        """Get the HTTP session, creating it on first use."""
        if self._session is None or self._session.closed:
            await self.init()
        return self._session

    def command_url(self, command: str) -> str:
        """URL of a named backend command."""
        return f"{self.base_url}/commands/{command}"

    async def close(self):
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
