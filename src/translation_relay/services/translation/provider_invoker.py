"""Provider invoker - runs one provider against its remote endpoint(s)."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from translation_relay.services.translation.translation_provider import (
    DEFAULT_HEADERS,
    AuthenticatedProvider,
    EndpointProvider,
    SdkProvider,
    TranslationProvider,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


def expand_template(template: str, query: str, from_lang: str, to_lang: str) -> str:
    """Fill {query}, {from} and {to} in an endpoint URL template."""
    return template.replace("{query}", query).replace("{from}", from_lang).replace("{to}", to_lang)


class ProviderInvoker:
    """
    Executes translation requests for a single provider at a time.

    Every outcome other than a 200 response with a non-empty parsed
    translation is a failure and yields None; nothing is raised to the
    caller. Owns the HTTP client unless one is injected.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)

    def invoke(
        self, provider: TranslationProvider, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        """
        Translate text with one provider.

        Returns:
            The translation, or None when the provider failed.
        """
        logger.debug("Trying provider: %s", provider.display_name)

        if isinstance(provider, SdkProvider):
            result = provider.translate(text, from_lang, to_lang)
        elif isinstance(provider, AuthenticatedProvider):
            result = self._invoke_authenticated(provider, text, from_lang, to_lang)
        elif isinstance(provider, EndpointProvider):
            result = self._invoke_endpoints(provider, text, from_lang, to_lang)
        else:
            logger.warning("Unsupported provider type: %s", type(provider).__name__)
            result = None

        if result:
            logger.debug("Translation successful with %s", provider.display_name)
            return result
        logger.debug("Provider %s failed", provider.display_name)
        return None

    def _invoke_authenticated(
        self, provider: AuthenticatedProvider, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        headers = provider.auth_headers(self.client)
        if headers is None:
            logger.debug("%s authentication failed", provider.display_name)
            return None

        url = provider.build_url(text, from_lang, to_lang)
        payload = provider.build_payload(text, from_lang, to_lang)
        return self._attempt(provider, provider.http_method, url, headers, payload)

    def _invoke_endpoints(
        self, provider: EndpointProvider, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        templates = provider.endpoint_templates()
        if not templates:
            logger.debug("Provider %s has no URLs configured", provider.display_name)
            return None

        query = quote(text, safe="")
        headers = dict(DEFAULT_HEADERS)
        headers.update(provider.headers())
        payload = None
        if provider.http_method == "POST":
            headers["Content-Type"] = "application/json"
            payload = provider.build_payload(text, from_lang, to_lang)

        for index, template in enumerate(templates, start=1):
            url = expand_template(template, query, from_lang, to_lang)
            logger.debug("Trying URL %d for provider %s", index, provider.display_name)
            result = self._attempt(provider, provider.http_method, url, headers, payload)
            if result:
                return result
        return None

    def _attempt(
        self,
        provider: TranslationProvider,
        method: str,
        url: str,
        headers: Dict[str, str],
        payload: Any,
    ) -> Optional[str]:
        """One HTTP call; returns the parsed translation or None."""
        try:
            if method == "POST":
                response = self.client.post(url, json=payload, headers=headers, timeout=self.timeout)
            else:
                response = self.client.get(url, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.debug("%s request to %s failed: %s", provider.display_name, url, e)
            return None

        if response.status_code != 200:
            logger.debug(
                "%s failed with response code %d for %s", provider.display_name, response.status_code, url
            )
            return None

        translation = provider.parse_response(response.text)
        if not translation:
            logger.debug("%s returned no translation for %s", provider.display_name, url)
            return None
        return translation

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
