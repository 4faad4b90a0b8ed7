"""Request/response client for backend commands."""
import asyncio
import json
import logging
from typing import Any
import aiohttp

from backend.connection import BackendConnection
from shared.utils import build_params

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Error reported by the backend or raised while reaching it.

    The message is the backend's own description; no structured codes.
    """


class BackendClient:
    """Invokes named commands on the backend."""

    def __init__(self, connection: BackendConnection):
        self.connection = connection

    async def invoke(self, command: str, **params: Any) -> Any:
        """
        Invoke a backend command and return its decoded JSON result.

        Parameter names are sent camelCased and None values are dropped.
        Raises BackendError on any transport or backend failure.
        """
        session = await self.connection.get_session()
        url = self.connection.command_url(command)

        try:
            async with session.post(url, json=build_params(params)) as response:
                body = await response.text()

                if response.status >= 400:
                    raise BackendError(body or f"HTTP Error {response.status}")

                if not body:
                    return None
                return json.loads(body)

        except asyncio.TimeoutError:
            raise BackendError(f"Timeout after {self.connection.timeout} seconds calling {command}")
        except aiohttp.ClientError as e:
            raise BackendError(f"Network error: {str(e)}")
        except ValueError as e:
            # Covers both malformed JSON and bodies that are not valid UTF-8.
            logger.error(f"Invalid response body returned by {command}: {e}")
            raise BackendError(f"Invalid response from {command}")
