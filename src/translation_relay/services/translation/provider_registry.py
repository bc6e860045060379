"""Provider registry - ordered backends with enable state and preferred-first ordering."""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from translation_relay.services.translation.gemini_provider import GeminiProvider
from translation_relay.services.translation.keyed_providers import (
    DeepLProvider,
    MicrosoftTranslateProvider,
    OpenAIProvider,
)
from translation_relay.services.translation.public_providers import (
    ArgosProvider,
    GoogleTranslateProvider,
    LibreTranslateProvider,
    LingvaProvider,
    MyMemoryProvider,
)
from translation_relay.services.translation.translation_provider import TranslationProvider

logger = logging.getLogger(__name__)

PROVIDER_CLASSES = (
    GoogleTranslateProvider,
    LibreTranslateProvider,
    MyMemoryProvider,
    LingvaProvider,
    MicrosoftTranslateProvider,
    DeepLProvider,
    OpenAIProvider,
    ArgosProvider,
    GeminiProvider,
)


class ProviderRegistry:
    """
    Holds translation providers in registration order.

    Registration order is the default trial order. Enabled state lives on
    each provider and can be flipped at runtime with toggle().
    """

    def __init__(self, providers: Iterable[TranslationProvider] = ()):
        self._providers: List[TranslationProvider] = []
        for provider in providers:
            self.register(provider)

    def register(self, provider: TranslationProvider) -> None:
        if self.get(provider.provider_id) is not None:
            raise ValueError(f"Provider already registered: {provider.provider_id}")
        self._providers.append(provider)

    def get(self, provider_id: Optional[str]) -> Optional[TranslationProvider]:
        for provider in self._providers:
            if provider.provider_id == provider_id:
                return provider
        return None

    def all(self) -> List[TranslationProvider]:
        return list(self._providers)

    def list_enabled(self) -> List[TranslationProvider]:
        """Enabled providers in registration order."""
        return [provider for provider in self._providers if provider.enabled]

    def select_order(self, preferred_id: Optional[str] = None) -> List[TranslationProvider]:
        """
        Trial order for one request.

        Same as list_enabled(), with the preferred provider moved to the front
        when it is enabled. The rest keep their relative order.
        """
        enabled = self.list_enabled()
        for index, provider in enumerate(enabled):
            if provider.provider_id == preferred_id:
                enabled.insert(0, enabled.pop(index))
                break
        return enabled

    def toggle(self, provider_id: str) -> Optional[bool]:
        """
        Flip a provider's enabled flag.

        Returns:
            The new enabled state, or None when no provider has that id.
        """
        provider = self.get(provider_id)
        if provider is None:
            logger.warning("Cannot toggle unknown provider %r", provider_id)
            return None
        provider.enabled = not provider.enabled
        logger.info("%s is now %s", provider.display_name, "enabled" if provider.enabled else "disabled")
        return provider.enabled

    def apply_config(self, config: Dict[str, Any]) -> None:
        """Hand each provider its configuration block, keyed by provider id."""
        for provider in self._providers:
            block = config.get(provider.provider_id)
            if isinstance(block, dict):
                provider.configure(block)

    def default_config(self) -> Dict[str, Dict[str, Any]]:
        """Configuration blocks for a freshly created providers file."""
        return {provider.provider_id: provider.default_config() for provider in self._providers}

    def __iter__(self) -> Iterator[TranslationProvider]:
        return iter(list(self._providers))

    def __len__(self) -> int:
        return len(self._providers)


def default_registry(config: Optional[Dict[str, Any]] = None) -> ProviderRegistry:
    """Registry with every built-in provider, configured from config."""
    registry = ProviderRegistry(cls() for cls in PROVIDER_CLASSES)
    if config:
        registry.apply_config(config)
    return registry
