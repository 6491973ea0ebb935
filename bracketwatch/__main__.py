"""Main entry point for the bracket viewer."""

import argparse
import sys

from . import __version__
from .config import Settings
from .ui.bracket_display import BracketDisplay
from .utils.logging import log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bracketwatch", description="Live NCAA tournament bracket TUI"
    )
    parser.add_argument(
        "--bracket-json",
        help="Load the bracket from a local ESPN tournaments JSON file "
        "(also BRACKETWATCH_BRACKET_JSON)",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Show the embedded 2025 bracket without touching the network",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between live score refreshes (default 30)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def resolve_settings(argv: list[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    if args.poll_interval is not None and args.poll_interval <= 0:
        log("❌ --poll-interval must be positive")
        sys.exit(2)
    return Settings.from_env().merged(
        bracket_json=args.bracket_json,
        poll_interval=args.poll_interval,
        demo=args.demo,
    )


def main(argv: list[str] | None = None):
    """Main entry point"""
    settings = resolve_settings(argv)

    log("🔍 Settings:")
    log(f"   Bracket JSON: {settings.bracket_json}")
    log(f"   Demo: {settings.demo}")
    log(f"   Poll interval: {settings.poll_interval}s")

    if settings.demo:
        log("🏆 Running in DEMO mode with the embedded 2025 bracket")
    elif settings.bracket_json:
        log(f"📁 Running with local bracket file: {settings.bracket_json}")
    else:
        log("🌐 Running with live NCAA/ESPN data")
    log("   Press q to exit\n")

    app = BracketDisplay(settings=settings)

    try:
        log("🏁 Starting Textual app...")
        app.run()
        log("🏁 Textual app finished")
    except KeyboardInterrupt:
        log("\n👋 Bracket viewer stopped")
    except Exception as e:
        log(f"❌ App crashed: {type(e).__name__}: {e}")
        raise
    finally:
        # Always clean up terminal state regardless of how app exits
        app._cleanup_terminal()


if __name__ == "__main__":
    main()
