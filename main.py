"""
formbake command line.

    python main.py serve [--host H] [--port P]
    python main.py sample out.pdf
    python main.py inject in.pdf fields.json out.pdf
    python main.py verify <document_id> [--which original|result]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from core.config.config_service import get_config_service

logger = logging.getLogger("formbake")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    cfg = get_config_service().app_config.server
    uvicorn.run("server.app:app", host=args.host or cfg.host, port=args.port or cfg.port)
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    from injection.logic.sample_document import generate_sample_pdf

    Path(args.output).write_bytes(generate_sample_pdf())
    logger.info("Sample document written to %s", args.output)
    return 0


def cmd_inject(args: argparse.Namespace) -> int:
    from injection.logic.field_injector import FieldInjector
    from placement.models.field import Field

    raw = json.loads(Path(args.fields).read_text(encoding="utf-8"))
    items = raw.get("fields", []) if isinstance(raw, dict) else raw
    fields = [Field.from_dict(item) for item in items]

    result = FieldInjector().inject(Path(args.input).read_bytes(), fields)
    Path(args.output).write_bytes(result)
    logger.info("Injected %d fields into %s", len(fields), args.output)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    from signing.logic.signing_service import create_signing_service

    outcome = create_signing_service().verify({"which": args.which}, args.document_id)
    print(json.dumps(outcome, indent=2))
    return 0 if outcome["integrityValid"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="formbake", description="Bake form fields into PDF documents.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("serve", help="run the HTTP API")
    p.add_argument("--host")
    p.add_argument("--port", type=int)
    p.set_defaults(func=cmd_serve)

    p = sub.add_parser("sample", help="write the sample contract PDF")
    p.add_argument("output")
    p.set_defaults(func=cmd_sample)

    p = sub.add_parser("inject", help="burn fields from a JSON file into page 1")
    p.add_argument("input")
    p.add_argument("fields")
    p.add_argument("output")
    p.set_defaults(func=cmd_inject)

    p = sub.add_parser("verify", help="check a stored file against its recorded digest")
    p.add_argument("document_id")
    p.add_argument("--which", choices=("original", "result"), default="result")
    p.set_defaults(func=cmd_verify)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(get_config_service().app_config.logging.level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
