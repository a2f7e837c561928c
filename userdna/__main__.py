"""Entry point for userdna.

Usage:
    python -m userdna conversations.json                 # Markdown profile
    python -m userdna conversations.json --format json   # JSON profile
    python -m userdna conversations.json --out profile.md --budget 1500
    python -m userdna --serve-guidelines --port 3000     # Docs guidelines API
"""

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

from .analyzer import analyze
from .config import Config
from .conversations import load_conversations
from .report import FORMATS, render
from .tokens import check_budget


def _setup_logging(log_dir: Path):
    """Configure logging to both stderr and file with rotation."""
    logger = logging.getLogger("userdna")
    if logger.handlers:
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "userdna.log"

    logger.setLevel(logging.INFO)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10*1024*1024, backupCount=3
    )
    file_handler.setLevel(logging.INFO)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="userdna",
        description="Build a User DNA Profile from a ChatGPT conversations export",
    )
    parser.add_argument("input", nargs="?",
                        help="Path to conversations.json")
    parser.add_argument("--format", choices=FORMATS, default=None,
                        help="Output format (default: markdown)")
    parser.add_argument("--out", type=str, default=None,
                        help="Output file path (default: user_dna_profile.<ext>)")
    parser.add_argument("--budget", type=int, default=None,
                        help="Token budget for the rendered profile")
    parser.add_argument("--serve-guidelines", action="store_true",
                        help="Run the documentation guidelines API instead")
    parser.add_argument("--port", type=int, default=None,
                        help="Port for --serve-guidelines")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to config file")
    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config(Path(args.config)) if args.config else Config()
    except (OSError, ValueError) as e:
        print(f"Error: Could not read config: {e}", file=sys.stderr)
        return 1

    logger = _setup_logging(config.log_dir)
    logger.info(f"Starting userdna with config from {config.config_path}")

    if args.serve_guidelines:
        from .guidelines import serve_guidelines
        serve_guidelines(
            port=args.port or config["guidelines_port"],
            max_chars=config["guidelines_max_chars"],
            timeout=config["fetch_timeout"],
        )
        return 0

    if not args.input:
        parser.print_usage(sys.stderr)
        print("\nExample:\n"
              "  python -m userdna ./conversations.json\n"
              "  python -m userdna ./conversations.json --format json",
              file=sys.stderr)
        return 1

    return _analyze_file(Path(args.input), args, config)


def _analyze_file(input_path: Path, args, config: Config) -> int:
    logger = logging.getLogger("userdna")
    fmt = args.format or config["default_format"]
    budget = args.budget if args.budget is not None else config["token_budget"]

    if fmt not in FORMATS:
        print(f"Error: Unknown format: {fmt}", file=sys.stderr)
        return 1

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    print(f"Loading conversations from: {input_path}", file=sys.stderr)

    try:
        conversations = load_conversations(input_path)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Failed to load {input_path}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not conversations:
        print("Error: No conversations found in file", file=sys.stderr)
        return 1

    result = analyze(conversations, config["sample_fraction"])
    output = render(result, fmt)

    output_path = Path(args.out) if args.out else config.output_path(fmt)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")

    tokens, within = check_budget(output, budget)
    stats = result["stats"]
    print(f"Analyzed {stats['analyzed_conversations']} of {stats['total_conversations']} "
          f"conversations ({stats['total_messages']} messages)", file=sys.stderr)
    print(f"Output written to: {output_path}", file=sys.stderr)
    print(f"Estimated tokens: {tokens} / {budget}", file=sys.stderr)
    if within:
        print("Output is within token limit.", file=sys.stderr)

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
