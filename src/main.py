"""CLI entrypoint for the code variants service."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from code_variants.agents import AgentSignals, rewrite_code, validate_code
from code_variants.config import AppConfig, log_startup_diagnostics
from code_variants.errors import CodeVariantsError
from code_variants.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-variants",
        description="Generate equivalent Python variants with Gemini and analyse them.",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to an optional dotenv file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rewrite_parser = subparsers.add_parser("rewrite", help="Generate a variant of a Python script.")
    rewrite_parser.add_argument("source", help="Path to the original Python script.")
    rewrite_parser.add_argument(
        "--instructions",
        default="",
        help="Extra instructions that take priority over the random technique choice.",
    )
    rewrite_parser.add_argument("--seed", type=int, help="Seed for more repeatable generations.")
    rewrite_parser.add_argument("--output", help="Write the variant to this file instead of stdout.")

    validate_parser = subparsers.add_parser("validate", help="Analyse how a variant differs from the original.")
    validate_parser.add_argument("original", help="Path to the original Python script.")
    validate_parser.add_argument("generated", help="Path to the generated variant.")
    return parser


def _read_source(path_value: str) -> str:
    path = Path(path_value)
    if not path.is_file():
        raise FileNotFoundError(f"Source file not found: {path}")
    return path.read_text(encoding="utf-8")


async def _run_rewrite(args: argparse.Namespace, signals: AgentSignals) -> None:
    variant = await rewrite_code(
        _read_source(args.source),
        args.instructions,
        args.seed,
        signals=signals,
    )
    if args.output:
        Path(args.output).write_text(variant + "\n", encoding="utf-8")
        LOGGER.info("Variant written to %s", args.output)
        return
    print(variant)


async def _run_validate(args: argparse.Namespace, signals: AgentSignals) -> None:
    analysis = await validate_code(
        _read_source(args.original),
        _read_source(args.generated),
        signals=signals,
    )
    print(json.dumps(analysis.model_dump(by_alias=True), ensure_ascii=False, indent=2))


def run(args: argparse.Namespace) -> int:
    config = AppConfig.from_env(env_file=args.env_file)
    configure_logging(config.log_level)
    log_startup_diagnostics(config)
    signals = AgentSignals.from_config(config)

    handlers = {
        "rewrite": _run_rewrite,
        "validate": _run_validate,
    }
    try:
        asyncio.run(handlers[args.command](args, signals))
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Execution failed: {exc}")
        return 1
    except CodeVariantsError as exc:
        print(str(exc))
        return 1
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
