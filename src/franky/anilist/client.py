"""Async GraphQL client for the AniList API.

One ``aiohttp.ClientSession`` is shared by every request and created lazily
inside the running event loop. Requests use aiohttp's default timeout, and
a timeout is reported as :class:`NetworkError` like any other transport failure.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from franky.anilist.errors import NetworkError
from franky.util.logger import get_logger

logger = get_logger("anilist_client")

ANILIST_API_URL = "https://graphql.anilist.co"

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AniListClient:
    """Thin wrapper posting GraphQL documents to AniList.

    Parameters
    ----------
    api_url:
        GraphQL endpoint to post to.
    session:
        Optional pre-built session. When omitted, a session is created on the
        first request and owned (and closed) by this client.
    """

    def __init__(self, api_url: str = ANILIST_API_URL, session: Optional[aiohttp.ClientSession] = None) -> None:
        self.api_url = api_url
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=REQUEST_HEADERS)
            self._owns_session = True
        return self._session

    async def post_query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Send one GraphQL document and return the decoded JSON envelope.

        Parameters
        ----------
        query:
            GraphQL query text.
        variables:
            Variables bound to the query. ``None`` values are sent as JSON null,
            which AniList treats as an omitted argument.

        Returns
        -------
        dict
            The response body, normally ``{"data": {...}}``. A body that is
            not a JSON object is returned as an empty dict.

        Raises
        ------
        NetworkError
            The endpoint was unreachable, answered with a non-2xx status, or
            sent a body that is not JSON.
        """
        session = self._get_session()
        try:
            async with session.post(
                self.api_url,
                json={"query": query, "variables": variables},
                headers=REQUEST_HEADERS,
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(response.status, response.reason or "")
                try:
                    payload = await response.json(content_type=None)
                except ValueError as exc:
                    raise NetworkError(response.status, f"invalid JSON body: {exc}") from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(None, str(exc) or exc.__class__.__name__) from exc

        if not isinstance(payload, dict):
            logger.warning("[ANILIST] Unexpected response body type %s", type(payload).__name__)
            return {}
        return payload

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug("[ANILIST] HTTP session closed")
        self._session = None
