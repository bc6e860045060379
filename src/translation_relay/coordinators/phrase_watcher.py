"""Phrase watcher - decides when an incoming phrase should be translated."""

import logging
from typing import Optional

from translation_relay.services.translation_resolver import TranslationResolver

logger = logging.getLogger(__name__)


class PhraseWatcher:
    """
    Coordinates polled input (e.g. the last phrase a screen reader spoke)
    with the resolver.

    Remembers the last phrase seen and the last translation produced so a
    poll loop neither repeats work nor re-translates its own output once
    that output is read back as input.
    """

    def __init__(
        self,
        resolver: TranslationResolver,
        source_lang: str = "auto",
        destination_lang: str = "en",
        auto_translate: bool = False,
    ):
        self.resolver = resolver
        self.source_lang = source_lang
        self.destination_lang = destination_lang
        self.auto_translate = auto_translate
        self.last_phrase: Optional[str] = None
        self.last_translation: Optional[str] = None

    def check(self, phrase: Optional[str]) -> Optional[str]:
        """
        Poll hook: translate phrase if it is new and auto-translate is on.

        Returns:
            The translation to output, or None when nothing should happen.
        """
        if not phrase or not phrase.strip() or phrase == self.last_phrase:
            return None

        if phrase == self.last_translation:
            self.last_phrase = phrase
            return None

        if not self.auto_translate:
            logger.debug("Auto translate disabled")
            return None

        self.last_phrase = phrase
        return self.translate_now(phrase)

    def translate_now(self, phrase: Optional[str]) -> str:
        """Manual trigger: always resolve phrase, regardless of auto-translate."""
        translation = self.resolver.resolve(phrase, self.source_lang, self.destination_lang)
        self.last_translation = translation
        return translation

    def toggle_auto_translate(self) -> bool:
        self.auto_translate = not self.auto_translate
        logger.info("Auto translation is now %s", "enabled" if self.auto_translate else "disabled")
        return self.auto_translate
