"""Translation providers - the closed set of backend variants the invoker can run."""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


def decode_json(body: str) -> Any:
    """Decode a JSON body, returning None instead of raising."""
    try:
        return json.loads(body)
    except (TypeError, ValueError):
        return None


def first_item(value: Any) -> Any:
    """Return value[0] for a non-empty list, else None."""
    if isinstance(value, list) and value:
        return value[0]
    return None


@dataclass
class AuthState:
    """Bearer token cached by providers that authenticate per session."""

    token: Optional[str] = None
    expires_at: float = 0.0

    def valid(self, now: float) -> bool:
        return bool(self.token) and now < self.expires_at


class TranslationProvider(ABC):
    """
    Base for every translation backend.

    A provider carries its identity, runtime enabled flag and per-provider
    configuration block (api_key, model, ...), plus the parsing rule for its
    response bodies. HTTP is performed by ProviderInvoker, not here.
    """

    provider_id: str = ""
    display_name: str = ""
    enabled_by_default: bool = True
    requires_auth: bool = False
    http_method: str = "GET"
    description: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.enabled = self.enabled_by_default
        self.config: Dict[str, Any] = dict(config or {})

    def configure(self, config: Dict[str, Any]) -> None:
        """Replace this provider's configuration block."""
        self.config = dict(config or {})
        if "enabled" in self.config:
            self.enabled = bool(self.config["enabled"])

    @property
    def api_key(self) -> Optional[str]:
        key = self.config.get("api_key")
        if isinstance(key, str) and key.strip():
            return key.strip()
        return None

    def default_config(self) -> Dict[str, Any]:
        """Configuration block written to a fresh providers file."""
        config: Dict[str, Any] = {"enabled": self.enabled_by_default}
        if self.description:
            config["description"] = self.description
        return config

    def headers(self) -> Dict[str, str]:
        """Provider-specific headers merged over DEFAULT_HEADERS."""
        return {}

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        """JSON payload for POST requests."""
        return None

    @abstractmethod
    def parse_response(self, body: str) -> Optional[str]:
        """
        Extract the translation from a raw response body.

        Returns:
            The translated text, or None when the body does not have the
            expected shape. Must not raise.
        """
        pass

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return f"<{type(self).__name__} {self.provider_id} ({state})>"


class EndpointProvider(TranslationProvider):
    """
    Keyless provider tried against an ordered list of URL templates.

    Templates may contain {query} (percent-encoded text), {from} and {to}.
    """

    endpoints: List[str] = []

    def endpoint_templates(self) -> List[str]:
        return list(self.endpoints)


class AuthenticatedProvider(TranslationProvider):
    """
    Provider that needs credentials and talks to a single URL.

    auth_headers() returning None means the provider cannot authenticate
    right now and must be treated as failed.
    """

    requires_auth = True
    http_method = "POST"

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(config)
        self.auth = AuthState()
        self._clock = clock

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config["api_key"] = ""
        return config

    @abstractmethod
    def build_url(self, text: str, from_lang: str, to_lang: str) -> str:
        pass

    @abstractmethod
    def auth_headers(self, client: httpx.Client) -> Optional[Dict[str, str]]:
        pass


class SdkProvider(TranslationProvider):
    """Provider reached through a vendor SDK instead of raw HTTP."""

    requires_auth = True
    http_method = "SDK"

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config["api_key"] = ""
        return config

    @abstractmethod
    def translate(self, text: str, from_lang: str, to_lang: str) -> Optional[str]:
        """Translate via the SDK; None on any failure."""
        pass

    def parse_response(self, body: str) -> Optional[str]:
        if not isinstance(body, str):
            return None
        return body.strip() or None
