"""Translation services - provider variants, registry and invoker."""

from translation_relay.services.translation.translation_provider import (
    AuthState,
    AuthenticatedProvider,
    EndpointProvider,
    SdkProvider,
    TranslationProvider,
)
from translation_relay.services.translation.public_providers import (
    ArgosProvider,
    GoogleTranslateProvider,
    LibreTranslateProvider,
    LingvaProvider,
    MyMemoryProvider,
)
from translation_relay.services.translation.keyed_providers import (
    DeepLProvider,
    MicrosoftTranslateProvider,
    OpenAIProvider,
)
from translation_relay.services.translation.gemini_provider import GeminiProvider
from translation_relay.services.translation.provider_registry import ProviderRegistry, default_registry
from translation_relay.services.translation.provider_invoker import ProviderInvoker

__all__ = [
    "AuthState",
    "AuthenticatedProvider",
    "EndpointProvider",
    "SdkProvider",
    "TranslationProvider",
    "ArgosProvider",
    "GoogleTranslateProvider",
    "LibreTranslateProvider",
    "LingvaProvider",
    "MyMemoryProvider",
    "DeepLProvider",
    "MicrosoftTranslateProvider",
    "OpenAIProvider",
    "GeminiProvider",
    "ProviderRegistry",
    "default_registry",
    "ProviderInvoker",
]
