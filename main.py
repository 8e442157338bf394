"""Entry point for desktop-webmail."""

from __future__ import annotations

import argparse
from typing import Sequence

from desktop_webmail import PreferenceStore, ProviderRegistry, Resolver, ensure_dirs, load_context
from desktop_webmail.log import configure_logging
from desktop_webmail.opener import OpenerError, open_url

_DISPLAY_ERROR_MESSAGE = (
    "The webmail provider dialog could not be started. "
    "Make sure a graphical environment (DISPLAY) is available."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="desktop-webmail",
        description="Open mailto: links and the inbox of your webmail provider.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="mailto: URL to compose; without it the provider's inbox is opened",
    )
    parser.add_argument(
        "--config",
        action="store_true",
        help="choose the webmail provider again, even if one is remembered",
    )
    parser.add_argument("--verbose", action="store_true", help="log debug details to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    context = load_context()
    configure_logging(verbose=args.verbose or context.verbose)
    ensure_dirs(context)

    try:
        from desktop_webmail.ui import DisplayUnavailableError, select_provider
    except ImportError as exc:  # pragma: no cover - tkinter missing from the interpreter
        raise SystemExit(_DISPLAY_ERROR_MESSAGE) from exc

    resolver = Resolver(
        store=PreferenceStore(context.preference_path),
        load_registry=lambda: ProviderRegistry.load(context.registry_sources),
        select=select_provider,
        open_url=open_url,
    )
    target = args.target if args.target and args.target.strip() else None
    try:
        resolver.resolve(target, force_config=args.config)
    except DisplayUnavailableError as exc:
        raise SystemExit(_DISPLAY_ERROR_MESSAGE) from exc
    except OpenerError as exc:
        raise SystemExit(str(exc)) from exc
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
