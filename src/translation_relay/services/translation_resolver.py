"""Translation resolver - cache first, then providers in order, then the input itself."""

import logging
from typing import Optional

from translation_relay.core import CacheStats
from translation_relay.services.caching import TranslationCache
from translation_relay.services.text_processing import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG
from translation_relay.services.translation import ProviderInvoker, ProviderRegistry

logger = logging.getLogger(__name__)


class TranslationResolver:
    """
    Single entry point for turning text into a translation.

    resolve() never raises and always returns a string. Cache hits skip the
    network entirely; the first provider that succeeds has its result cached
    under its display name; if every provider fails the input text is
    returned unchanged.

    Calls are expected to run one at a time (manual requests and the poll
    loop share the same thread), so the cache needs no locking.
    """

    def __init__(
        self,
        cache: TranslationCache,
        registry: ProviderRegistry,
        invoker: Optional[ProviderInvoker] = None,
        preferred_provider_id: Optional[str] = None,
    ):
        self.cache = cache
        self.registry = registry
        self.invoker = invoker if invoker is not None else ProviderInvoker()
        self.preferred_provider_id = preferred_provider_id

    def resolve(self, text: Optional[str], from_lang: Optional[str], to_lang: Optional[str]) -> str:
        """
        Translate text from from_lang to to_lang.

        Args:
            text: Text to translate. Blank text is returned as-is.
            from_lang: Source language code; None means "auto".
            to_lang: Target language code; None means "en".

        Returns:
            The translation, or text itself when nothing could translate it.
        """
        if text is None:
            return ""
        if not text.strip():
            return text

        from_lang = from_lang or DEFAULT_SOURCE_LANG
        to_lang = to_lang or DEFAULT_TARGET_LANG

        cached = self.cache.get(text, from_lang, to_lang)
        if cached is not None:
            logger.debug("Using cached translation for: %r", text)
            return cached

        for provider in self.registry.select_order(self.preferred_provider_id):
            try:
                result = self.invoker.invoke(provider, text, from_lang, to_lang)
            except Exception:
                logger.exception("Provider %s raised unexpectedly", provider.display_name)
                continue

            if result:
                self.cache.put(text, from_lang, to_lang, result, provider.display_name)
                return result

        logger.info("All translation providers failed, returning original text")
        return text

    # ------------------------------------------------------------------
    # Administrative operations
    # ------------------------------------------------------------------

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def clear_cache(self) -> None:
        """Empty the cache. Asking the user for confirmation is the caller's job."""
        self.cache.clear()

    def flush_cache(self) -> None:
        self.cache.save()

    def tick(self, now: Optional[float] = None) -> bool:
        """Timer hook: flush the cache when the autosave interval has passed."""
        return self.cache.flush_if_due(now)

    def toggle_provider(self, provider_id: str) -> Optional[bool]:
        return self.registry.toggle(provider_id)

    def set_preferred_provider(self, provider_id: Optional[str]) -> None:
        if provider_id is not None and self.registry.get(provider_id) is None:
            logger.warning("Preferred provider %r is not registered", provider_id)
        self.preferred_provider_id = provider_id

    @property
    def substitute_numbers(self) -> bool:
        return self.cache.substitute_numbers

    @substitute_numbers.setter
    def substitute_numbers(self, enabled: bool) -> None:
        self.cache.substitute_numbers = enabled

    def toggle_number_substitution(self) -> bool:
        self.cache.substitute_numbers = not self.cache.substitute_numbers
        logger.info(
            "Number substitution is now %s", "enabled" if self.cache.substitute_numbers else "disabled"
        )
        return self.cache.substitute_numbers

    def shutdown(self) -> None:
        """Persist the cache and release the HTTP client."""
        self.cache.save()
        self.invoker.close()
