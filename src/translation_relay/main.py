"""Main entry point for the translation relay command line."""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

import httpx

from translation_relay.coordinators import PhraseWatcher
from translation_relay.core import UserSettings
from translation_relay.services import (
    JsonFileCacheStorage,
    ProviderInvoker,
    SettingsManager,
    TranslationCache,
    TranslationResolver,
    default_registry,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Suppress noisy libraries at debug level
    if verbose:
        logging.getLogger("httpx").setLevel(logging.INFO)
        logging.getLogger("httpcore").setLevel(logging.INFO)


def build_resolver(
    settings_manager: SettingsManager,
    user_settings: Optional[UserSettings] = None,
    client: Optional[httpx.Client] = None,
) -> TranslationResolver:
    """
    Composition root: wire registry, cache and invoker from stored settings.

    This is the only place that knows how to instantiate all components.
    """
    if user_settings is None:
        user_settings = settings_manager.load_settings()

    registry = default_registry()
    registry.apply_config(settings_manager.load_provider_config(registry.default_config()))

    cache = TranslationCache(
        storage=JsonFileCacheStorage(settings_manager.cache_path),
        substitute_numbers=user_settings.substitute_numbers,
    )
    cache.load()

    return TranslationResolver(
        cache=cache,
        registry=registry,
        invoker=ProviderInvoker(client=client),
        preferred_provider_id=user_settings.preferred_provider,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="translation-relay",
        description="Translate text through a local cache and a chain of translation providers",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    translate = sub.add_parser("translate", help="Translate the given text")
    translate.add_argument("text", nargs="+")
    translate.add_argument("--from", dest="from_lang", default=None, help="Source language (default: settings)")
    translate.add_argument("--to", dest="to_lang", default=None, help="Target language (default: settings)")

    watch = sub.add_parser("watch", help="Translate each new line read from stdin")
    watch.add_argument(
        "--auto",
        action="store_true",
        help="Translate every new line even when auto translation is off in settings",
    )

    sub.add_parser("auto-translate", help="Turn stored auto translation on or off")
    sub.add_parser("stats", help="Show translation cache statistics")

    clear = sub.add_parser("clear", help="Clear the translation cache")
    clear.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("flush", help="Write the translation cache to disk now")
    sub.add_parser("providers", help="List providers and their state")

    toggle = sub.add_parser("toggle", help="Enable or disable a provider")
    toggle.add_argument("provider_id")

    prefer = sub.add_parser("prefer", help="Try this provider first")
    prefer.add_argument("provider_id")

    set_key = sub.add_parser("set-key", help="Store an API key for a provider and enable it")
    set_key.add_argument("provider_id")
    set_key.add_argument("api_key")

    return parser


def run_watch(watcher: PhraseWatcher, stream: TextIO, out: TextIO) -> int:
    """Feed stdin lines to the watcher; flush the cache on the autosave timer."""
    for line in stream:
        translation = watcher.check(line.rstrip("\n"))
        if translation is not None:
            print(translation, file=out, flush=True)
        watcher.resolver.tick()
    return 0


def main(
    argv: Optional[List[str]] = None,
    settings_manager: Optional[SettingsManager] = None,
    client: Optional[httpx.Client] = None,
) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    settings_manager = settings_manager or SettingsManager()
    user_settings = settings_manager.load_settings()

    if args.command in ("set-key", "prefer") and default_registry().get(args.provider_id) is None:
        print(f"Unknown provider: {args.provider_id}", file=sys.stderr)
        return 1

    if args.command == "set-key":
        return 0 if settings_manager.set_api_key(args.provider_id, args.api_key) else 1

    if args.command == "prefer":
        user_settings.preferred_provider = args.provider_id
        return 0 if settings_manager.save_settings(user_settings) else 1

    if args.command == "auto-translate":
        user_settings.auto_translate = not user_settings.auto_translate
        if not settings_manager.save_settings(user_settings):
            return 1
        print(f"Auto translation is now {'enabled' if user_settings.auto_translate else 'disabled'}")
        return 0

    resolver = build_resolver(settings_manager, user_settings, client=client)
    try:
        if args.command == "translate":
            text = " ".join(args.text)
            print(resolver.resolve(
                text,
                args.from_lang or user_settings.source_language,
                args.to_lang or user_settings.destination_language,
            ))
        elif args.command == "watch":
            watcher = PhraseWatcher(
                resolver,
                source_lang=user_settings.source_language,
                destination_lang=user_settings.destination_language,
                auto_translate=args.auto or user_settings.auto_translate,
            )
            if not watcher.auto_translate:
                print("Auto translation is off; pass --auto or run auto-translate", file=sys.stderr)
            run_watch(watcher, sys.stdin, sys.stdout)
        elif args.command == "stats":
            print(resolver.cache_stats().summary())
        elif args.command == "clear":
            count = resolver.cache_stats().entry_count
            if count == 0:
                print("Translation cache is already empty")
                return 0
            if not args.yes and input(f"Clear {count} cached translations? [y/N] ").strip().lower() != "y":
                return 1
            resolver.clear_cache()
            print("Translation cache cleared")
        elif args.command == "flush":
            resolver.flush_cache()
            print("Translation cache saved")
        elif args.command == "providers":
            for provider in resolver.registry:
                marker = "*" if provider.provider_id == resolver.preferred_provider_id else " "
                state = "enabled" if provider.enabled else "disabled"
                print(f"{marker} {provider.provider_id:<10} {provider.display_name:<20} {state}")
        elif args.command == "toggle":
            enabled = resolver.toggle_provider(args.provider_id)
            if enabled is None:
                print(f"Unknown provider: {args.provider_id}", file=sys.stderr)
                return 1
            settings_manager.set_provider_enabled(args.provider_id, enabled)
            print(f"{args.provider_id} is now {'enabled' if enabled else 'disabled'}")
    finally:
        resolver.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
