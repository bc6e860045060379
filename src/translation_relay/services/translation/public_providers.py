"""Keyless translation backends reached through public URL endpoints."""

import html
import re
from typing import Any, Dict, List, Optional

from translation_relay.services.translation.translation_provider import (
    EndpointProvider,
    decode_json,
    first_item,
)

_RESULT_CONTAINER = re.compile(r'class="result-container">(.*?)<', re.DOTALL)


class GoogleTranslateProvider(EndpointProvider):
    """
    Google Translate without an API key.

    The mobile page returns HTML; the translate_a endpoints return nested
    JSON arrays whose first element lists translated segments.
    """

    provider_id = "google"
    display_name = "Google Translate"
    endpoints = [
        "http://translate.google.com/m?hl={to}&sl={from}&q={query}",
        "https://translate.googleapis.com/translate_a/single?client=gtx&sl={from}&tl={to}&dt=t&q={query}",
        "https://translate.google.com/translate_a/single?client=gtx&sl={from}&tl={to}&dt=t&q={query}",
        "https://translate.google.co.kr/translate_a/single?client=gtx&sl={from}&tl={to}&dt=t&q={query}",
    ]

    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": (
                "Mozilla/4.0 (compatible; MSIE 6.0; Windows NT 5.1; SV1; .NET CLR 1.1.4322; "
                ".NET CLR 2.0.50727; .NET CLR 3.0.04506.30)"
            )
        }

    def parse_response(self, body: str) -> Optional[str]:
        match = _RESULT_CONTAINER.search(body)
        if match:
            return html.unescape(match.group(1))

        segments = first_item(decode_json(body))
        if not isinstance(segments, list):
            return None

        translated = "".join(
            segment[0]
            for segment in segments
            if isinstance(segment, list) and segment and isinstance(segment[0], str)
        )
        return translated or None


class LibreTranslateProvider(EndpointProvider):
    """LibreTranslate instances; a configured api_url is tried first."""

    provider_id = "libre"
    display_name = "LibreTranslate"
    http_method = "POST"
    description = "Public instances work without a key; set api_url/api_key for a private one"
    endpoints = [
        "https://libretranslate.de/translate",
        "https://libretranslate.com/translate",
    ]

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config.update({"api_key": "", "api_url": ""})
        return config

    def endpoint_templates(self) -> List[str]:
        templates = list(self.endpoints)
        api_url = self.config.get("api_url")
        if isinstance(api_url, str) and api_url.strip():
            templates.insert(0, api_url.strip())
        return templates

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        payload = {"q": text, "source": from_lang, "target": to_lang, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key
        return payload

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if isinstance(data, dict) and isinstance(data.get("translatedText"), str):
            return data["translatedText"]
        return None


class MyMemoryProvider(EndpointProvider):
    provider_id = "mymemory"
    display_name = "MyMemory"
    endpoints = [
        "https://api.mymemory.translated.net/get?q={query}&langpair={from}|{to}",
    ]

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if not isinstance(data, dict):
            return None
        response = data.get("responseData")
        if isinstance(response, dict) and isinstance(response.get("translatedText"), str):
            return response["translatedText"]
        return None


class LingvaProvider(EndpointProvider):
    """Lingva front-ends for Google Translate, tried mirror by mirror."""

    provider_id = "lingva"
    display_name = "Lingva Translate"
    endpoints = [
        "https://lingva.ml/api/v1/{from}/{to}/{query}",
        "https://translate.plausibility.cloud/api/v1/{from}/{to}/{query}",
        "https://translate.projectsegfau.lt/api/v1/{from}/{to}/{query}",
        "https://translate.dr460nf1r3.org/api/v1/{from}/{to}/{query}",
    ]

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if isinstance(data, dict) and isinstance(data.get("translation"), str):
            return data["translation"]
        return None


class ArgosProvider(EndpointProvider):
    """Local Argos Translate server (LibreTranslate-compatible API)."""

    provider_id = "argos"
    display_name = "Argos Translate"
    enabled_by_default = False
    http_method = "POST"
    description = "Requires a local LibreTranslate/Argos server on port 5000"
    endpoints = ["http://localhost:5000/translate"]

    def build_payload(self, text: str, from_lang: str, to_lang: str) -> Any:
        # Argos has no language detection
        source = "en" if from_lang == "auto" else from_lang
        return {"q": text, "source": source, "target": to_lang}

    def parse_response(self, body: str) -> Optional[str]:
        data = decode_json(body)
        if isinstance(data, dict) and isinstance(data.get("translatedText"), str):
            return data["translatedText"]
        return None
