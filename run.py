"""Dungeon generator CLI entry point.

Provides subcommands for generating a single dungeon (ASCII, JSON or PNG)
and for running the HTTP server. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style, just_fix_windows_console
from dotenv import load_dotenv

just_fix_windows_console()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

OUTPUT_FORMATS = ("ascii", "json", "png")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Generator

    Generate a room-and-maze dungeon layout once from the command line, or run
    the HTTP server that renders dungeons as PNG or JSON on request. Sizes are
    clamped to the same ranges the server enforces.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 8080)
          DUNGEON_LOG_LEVEL         debug|info|warn|error (default: info)
          DUNGEON_STRICT_CONNECTIVITY  1 to run the connectivity repair pass by default

        Examples:
          # Print a 50x50 dungeon as ASCII
          python run.py generate

          # Reproducible 80x40 dungeon written as PNG
          python run.py generate --width 80 --height 40 --seed 42 --format png --out dungeon.png

          # Integer grid as JSON on stdout
          python run.py generate --format json

          # Run the server on a custom port
          python run.py server --port 9000
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeon-gen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print or save it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single dungeon and emit it as ASCII, JSON or PNG",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width in tiles (20-1000, default 50)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height in tiles (20-1000, default 50)")
    gen_parser.add_argument(
        "--room-attempts",
        dest="room_attempts",
        type=int,
        default=None,
        help="Number of room placement trials (1-100000, default 200)",
    )
    gen_parser.add_argument("--min-room-size", dest="min_room_size", type=int, default=None, help="Minimum room side (default 5)")
    gen_parser.add_argument(
        "--max-room-size",
        dest="max_room_size",
        type=int,
        default=None,
        help="Room sides are drawn below this bound (default 15)",
    )
    gen_parser.add_argument("--pixel-size", dest="pixel_size", type=int, default=None, help="PNG pixels per tile (1-20, default 10)")
    gen_parser.add_argument("--seed", default=None, help="Integer or any string (hashed); random when omitted")
    gen_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Run the union-find connectivity repair after the regular connection passes",
    )
    gen_parser.add_argument("--format", choices=OUTPUT_FORMATS, default="ascii", help="Output format (default ascii)")
    gen_parser.add_argument("--out", default=None, help="Write output to this file (required for png)")
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve /generate/ (PNG), /generate/json/ and /generate/metrics/",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 8080)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to a single generation
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(list(argv) + ["generate"])
    return args


def _color(text: str, color: str) -> str:
    if not sys.stderr.isatty():
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def _build_config(args: argparse.Namespace):
    from app.dungeon.config import DungeonConfig, parse_flag

    params = {
        "width": args.width,
        "height": args.height,
        "room_attempts": args.room_attempts,
        "min_room_size": args.min_room_size,
        "max_room_size": args.max_room_size,
        "pixel_size": args.pixel_size,
        "seed": args.seed,
    }
    if args.strict is None:
        params["strict"] = parse_flag(os.getenv("DUNGEON_STRICT_CONNECTIVITY"), False)
    else:
        params["strict"] = args.strict
    return DungeonConfig.from_params(params)


def run_generate(args: argparse.Namespace) -> int:
    from app.dungeon import generate_from_config
    from app.dungeon.serialize import dumps, render_ascii

    if args.format == "png" and not args.out:
        print(_color("[ERROR] --out is required for png output", Fore.RED), file=sys.stderr)
        return 2

    config = _build_config(args)
    dungeon = generate_from_config(config)

    if args.format == "png":
        from app.dungeon.render import png_bytes

        with open(args.out, "wb") as f:
            f.write(png_bytes(dungeon, config.pixel_size))
    else:
        text = render_ascii(dungeon) if args.format == "ascii" else dumps(dungeon)
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                f.write(text + "\n")
        else:
            print(text)

    summary = (
        f"{_color('seed', Fore.YELLOW)}={_color(str(dungeon.seed), Fore.GREEN)} "
        f"{_color('size', Fore.YELLOW)}={dungeon.width}x{dungeon.height} "
        f"{_color('rooms', Fore.YELLOW)}={len(dungeon.rooms)} "
        f"{_color('regions', Fore.YELLOW)}={dungeon.num_regions}"
    )
    if args.out:
        summary += f" {_color('out', Fore.YELLOW)}={args.out}"
    print(summary, file=sys.stderr)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()

    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "8080"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from app.logging_utils import log
    from app.server import start_server

    divider = _color("=" * 40, Fore.MAGENTA)
    lines = [
        divider,
        f"  {_color('Dungeon Generator Server', Fore.CYAN + Style.BRIGHT)}",
        divider,
        f"  {_color('Host:', Fore.YELLOW):12} {_color(str(host), Fore.GREEN)}",
        f"  {_color('Port:', Fore.YELLOW):12} {_color(str(port), Fore.GREEN)}",
        f"  {_color('Version:', Fore.YELLOW):12} {_color(__version__, Fore.GREEN)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
