"""Gemini Translation Provider - translation via the Google Gemini API."""

import logging
from typing import Any, Dict, Optional

import google.genai as genai
from google.genai import types

from translation_relay.services.translation.translation_provider import SdkProvider

logger = logging.getLogger(__name__)


class GeminiProvider(SdkProvider):
    """
    Translation provider using the Google Gemini API.

    Optimized for speed and consistency with lower temperature settings.
    Uses the google.genai package; disabled until an api_key is configured.
    """

    provider_id = "gemini"
    display_name = "Gemini Translate"
    enabled_by_default = False
    description = "Get a key from https://aistudio.google.com/apikey"

    DEFAULT_MODEL = "gemini-2.5-flash-lite"

    TRANSLATION_PROMPT = """Translate the following text from {source} to {target}.
Preserve the tone and nuance of the original.
Only output the translation, nothing else.

Text:
{text}"""

    def default_config(self) -> Dict[str, Any]:
        config = super().default_config()
        config["model"] = self.DEFAULT_MODEL
        return config

    @property
    def model(self) -> str:
        return self.config.get("model") or self.DEFAULT_MODEL

    def translate(self, text: str, from_lang: str, to_lang: str) -> Optional[str]:
        """
        Translate text using the Gemini API.

        Args:
            text: Text to translate.
            from_lang: Source language code, or "auto".
            to_lang: Target language code.

        Returns:
            Translated text, or None when no key is configured or the call fails.
        """
        if not self.api_key:
            logger.debug("%s has no api_key configured", self.display_name)
            return None

        prompt = self.TRANSLATION_PROMPT.format(
            source="the detected language" if from_lang == "auto" else from_lang,
            target=to_lang,
            text=text,
        )

        try:
            client = genai.Client(api_key=self.api_key)
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.3,
                    top_p=0.95,
                    top_k=40,
                    max_output_tokens=1024,
                ),
            )
        except Exception as e:
            # The SDK raises a wide range of transport and API errors
            logger.warning("%s request failed (%s): %s", self.display_name, type(e).__name__, e)
            return None

        return self.parse_response(response.text)
