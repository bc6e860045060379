"""Coordinators - connect input triggers to the translation resolver."""

from translation_relay.coordinators.phrase_watcher import PhraseWatcher

__all__ = ["PhraseWatcher"]
