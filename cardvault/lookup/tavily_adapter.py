from typing import Any

import httpx

from cardvault.lookup.base import BaseLookupClient
from cardvault.lookup.exceptions import LookupClientError
from cardvault.lookup.models import LookupResult, Snippet


class TavilyLookupAdapter(BaseLookupClient):
    """Lookup client for the Tavily search API."""

    TAVILY_URL = "https://api.tavily.com/search"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        max_results: int = 5,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._max_results = max_results
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def search(self, query: str) -> LookupResult:
        payload = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": "advanced",
            "include_answer": True,
            "include_images": False,
            "max_results": self._max_results,
        }
        try:
            response = self._http.post(self.TAVILY_URL, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise LookupClientError(f"Tavily request failed: {exc}") from exc
        except ValueError as exc:
            raise LookupClientError(f"Tavily returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise LookupClientError("Tavily response must be an object")
        return LookupResult(
            snippets=self._snippets(data.get("results")),
            answer=data.get("answer") or None,
        )

    @staticmethod
    def _snippets(raw: Any) -> list[Snippet]:
        if not isinstance(raw, list):
            return []
        return [
            Snippet(title=str(item.get("title", "")), content=str(item.get("content", "")))
            for item in raw
            if isinstance(item, dict)
        ]
