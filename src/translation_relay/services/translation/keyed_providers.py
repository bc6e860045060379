"""Translation backends that need a token or API key before each request."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from translation_relay.services.translation.translation_provider import (
    AuthenticatedProvider,
    decode_json,
    first_item,
)

logger = logging.getLogger(__name__)

EDGE_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/116.0.0.0 Safari/537.36 Edg/116.0.1938.69"
)
CLIENT_USER_AGENT = "translation-relay/0.1"


class MicrosoftTranslateProvider(AuthenticatedProvider):
    """
    Microsoft Translator through the Edge browser's free token endpoint.

    Needs no API key: a short-lived JWT is fetched from AUTH_URL and reused
    until TOKEN_TTL seconds have passed.
    """

    provider_id = "microsoft"
    display_name = "Microsoft Translate"
    description = "Uses the free Edge authentication endpoint, no key needed"

    AUTH_URL = "https://edge.microsoft.com/translate/auth"
    TRANSLATE_URL = "https://api-edge.cognitive.microsofttranslator.com/translate"
    TOKEN_TTL = 600

    def default_config(self) -> Dict[str, Any]:
        return {"enabled": self.enabled_by_default, "description": self.description}

    def _browser_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": EDGE_USER_AGENT,
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": "https://appsumo.com/",
        }

    def get_auth_token(self, client: httpx.Client) -> Optional[str]:
        """Return a cached token, fetching a new one when absent or expired."""
        now = self._clock()
        if self.auth.valid(now):
            return self.auth.token

        headers = self._browser_headers()
        headers["Accept"] = "*/*"
        try:
            response = client.get(self.AUTH_URL, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s token request failed: %s", self.display_name, e)
            return None

        token = response.text.replace('"', "").strip() if response.status_code == 200 else ""
        if not token:
            logger.warning("%s token request returned %s", self.display_name, response.status_code)
            return None

        self.auth.token = token
        self.auth.expires_at = now + self.TOKEN_TTL
        return token

    def auth_headers(self, client: httpx.Client) -> Optional[Dict[str, str]]:
        token = self.get_auth_token(client)
        if not token:
            return None

        headers = self._browser_headers()
        headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        return headers

    def build_url(self, text: str, from_lang: str, to_lang: str) -> str:
        params = {
            "api-version": "3.0",
            "from": "" if from_lang == "auto" else from_lang,
            "to": to_lang,
        }
        return f"{self.TRANSLATE_URL}?{urlencode(params)}"

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        return [{"Text": text}]

    def parse_response(self, body: str) -> Optional[str]:
        result = first_item(decode_json(body))
        if not isinstance(result, dict):
            return None
        translation = first_item(result.get("translations"))
        if isinstance(translation, dict) and isinstance(translation.get("text"), str):
            return translation["text"]
        return None


class DeepLProvider(AuthenticatedProvider):
    provider_id = "deepl"
    display_name = "DeepL Translate"
    enabled_by_default = False
    description = "Get a free API key from https://www.deepl.com/pro/change-plan#developer"

    FREE_URL = "https://api-free.deepl.com/v2/translate"
    PRO_URL = "https://api.deepl.com/v2/translate"

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config["use_free_api"] = True
        return config

    def auth_headers(self, client: httpx.Client) -> Optional[Dict[str, str]]:
        if not self.api_key:
            return None
        return {
            "Authorization": f"DeepL-Auth-Key {self.api_key}",
            "Content-Type": "application/json",
            "User-Agent": CLIENT_USER_AGENT,
        }

    def build_url(self, text: str, from_lang: str, to_lang: str) -> str:
        return self.FREE_URL if self.config.get("use_free_api", True) else self.PRO_URL

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        payload = {"text": [text], "target_lang": to_lang.upper()}
        if from_lang != "auto":
            payload["source_lang"] = from_lang.upper()
        return payload

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if not isinstance(data, dict):
            return None
        translation = first_item(data.get("translations"))
        if isinstance(translation, dict) and isinstance(translation.get("text"), str):
            return translation["text"]
        return None


class OpenAIProvider(AuthenticatedProvider):
    """Chat-completions translation with a terse instruction prompt."""

    provider_id = "openai"
    display_name = "OpenAI Translate"
    description = "Get a key from https://platform.openai.com/api-keys"

    COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = "gpt-4o-mini"

    TRANSLATION_PROMPT = (
        "Translate the following text from {source} to {target}. "
        "Return only the translation, no explanations:\n\n{text}"
    )

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config["model"] = self.DEFAULT_MODEL
        return config

    @property
    def model(self) -> str:
        return self.config.get("model") or self.DEFAULT_MODEL

    def auth_headers(self, client: httpx.Client) -> Optional[Dict[str, str]]:
        if not self.api_key:
            return None
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "User-Agent": CLIENT_USER_AGENT,
        }

    def build_url(self, text: str, from_lang: str, to_lang: str) -> str:
        return self.COMPLETIONS_URL

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        prompt = self.TRANSLATION_PROMPT.format(
            source="the detected language" if from_lang == "auto" else from_lang,
            target=to_lang,
            text=text,
        )
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": 1000,
            "temperature": 0.3,
        }

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if not isinstance(data, dict):
            return None
        choice = first_item(data.get("choices"))
        message = choice.get("message") if isinstance(choice, dict) else None
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"].strip()
        return None
