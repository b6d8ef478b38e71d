"""Command line entry points for manifest generation."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Callable, Sequence

from .config import GeneratorConfig, load_config_from_path
from .exceptions import ConfigError, ManifestorError
from .generator import ManifestGenerator
from .logging_utils import configure_logging
from .miner import ModuleMiner
from .serializer import write_manifest_text


def _resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    if args.config is not None:
        config = load_config_from_path(args.config)
    else:
        config = GeneratorConfig(domain=getattr(args, "domain", None) or "", app_id=getattr(args, "id", None) or "")

    overrides = {}
    if getattr(args, "domain", None) is not None:
        overrides["domain"] = args.domain
    if getattr(args, "id", None) is not None:
        overrides["app_id"] = args.id
    if args.module:
        overrides["modules"] = tuple(args.module)
        overrides["scan_marked"] = False
    if args.scan_marked:
        overrides["scan_marked"] = True
    if getattr(args, "output", None) is not None:
        overrides["output"] = args.output
    if getattr(args, "indent", None) is not None:
        overrides["indent"] = args.indent
    return replace(config, **overrides)


def _make_generator(config: GeneratorConfig) -> ManifestGenerator:
    return ManifestGenerator(config.build_source(), ModuleMiner(), indent=config.indent)


def _cmd_generate(args: argparse.Namespace, config: GeneratorConfig) -> int:
    if not config.domain or not config.app_id:
        raise ConfigError("Both a domain and an app id are required to generate a manifest")
    generator = _make_generator(config)
    if args.empty:
        text = generator.generate_empty_manifest(config.domain, config.app_id)
    else:
        text = generator.generate_manifest(config.domain, config.app_id)

    if config.output is None:
        print(text)
        return 0

    write_manifest_text(text, config.output)
    print(f"manifest_written={config.output}")
    return 0


def _cmd_actions(_: argparse.Namespace, config: GeneratorConfig) -> int:
    for name in sorted(_make_generator(config).extract_manifest_data()):
        print(name)
    return 0


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML generator configuration file.",
    )
    parser.add_argument(
        "--module",
        action="append",
        default=[],
        help="Importable module to scan; may be repeated. Overrides the configured modules.",
    )
    parser.add_argument(
        "--scan-marked",
        action="store_true",
        help="Scan every imported module carrying the manifest marker attribute.",
    )
    parser.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        help="Python logging level; same as the top-level option.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manifestor",
        description="Generate action manifests from annotated Python modules.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Python logging level (default: the configured level, else INFO).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Print or write the manifest JSON for the selected modules.",
    )
    _add_source_arguments(generate_parser)
    generate_parser.add_argument("--domain", default=None, help="Friendly name of the app.")
    generate_parser.add_argument("--id", default=None, help="App identifier.")
    generate_parser.add_argument(
        "--empty",
        action="store_true",
        help="Emit a placeholder manifest without entities, actions or error handlers.",
    )
    generate_parser.add_argument("--output", type=Path, default=None, help="Write the manifest to this path.")
    generate_parser.add_argument("--indent", type=int, default=None, help="JSON indentation width.")
    generate_parser.set_defaults(handler=_cmd_generate)

    actions_parser = subparsers.add_parser(
        "actions",
        help="List the distinct action names declared by the selected modules.",
    )
    _add_source_arguments(actions_parser)
    actions_parser.set_defaults(handler=_cmd_actions)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler: Callable[[argparse.Namespace, GeneratorConfig], int] = args.handler
    try:
        config = _resolve_config(args)
        configure_logging(args.log_level or config.log_level)
        return handler(args, config)
    except ManifestorError as exc:
        print(f"error={exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
