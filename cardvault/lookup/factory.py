from cardvault.config.settings import Settings
from cardvault.lookup.base import BaseLookupClient
from cardvault.lookup.tavily_adapter import TavilyLookupAdapter


class LookupClientFactory:
    """Creates the configured lookup client, or None when lookup is disabled."""

    @classmethod
    def create(cls, settings: Settings) -> BaseLookupClient | None:
        provider = settings.lookup_provider.lower()
        if provider == "none":
            return None
        if provider == "tavily":
            if not settings.tavily_api_key:
                raise ValueError("tavily_api_key is required for lookup_provider=tavily")
            return TavilyLookupAdapter(
                api_key=settings.tavily_api_key,
                timeout_seconds=settings.tavily_timeout_seconds,
                max_results=settings.lookup_max_results,
            )
        raise ValueError(f"Unknown lookup provider '{provider}'. Choose from: ['none', 'tavily']")
