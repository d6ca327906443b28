from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import load_config
from .errors import TemplexUserError
from .jsonic import dumps as jdumps
from .report_schema import TokenizeReport
from .template import Keyword, collect_tokens
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="templex",
        description="Template lexer: text, {{ substitutions }} and {% directives %}",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--debug",
        action="store_true",
        help="подробный лог переходов лексера (также через TEMPLEX_DEBUG=1)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_tok = sub.add_parser("tokenize", help="JSON-отчёт: токены и лексические ошибки")
    sp_tok.add_argument("source", help="путь к шаблону или - для чтения из stdin")
    sp_tok.add_argument(
        "--config",
        metavar="PATH",
        help="файл конфигурации (по умолчанию ./templex.yaml, если существует)",
    )
    sp_tok.add_argument(
        "--recover",
        action="store_true",
        help="продолжать после ошибок, пропуская вход до ближайшего %%} или }}",
    )
    sp_tok.add_argument(
        "--text",
        action="store_true",
        help="вывести токены по одному в строке вместо JSON",
    )

    sub.add_parser("keywords", help="Список зарезервированных слов (JSON)")

    return p


def _debug_enabled(flag: bool) -> bool:
    """--debug или TEMPLEX_DEBUG=1/true/yes/on; '0' и пустое значение отладку не включают."""
    if flag:
        return True
    return os.environ.get("TEMPLEX_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if _debug_enabled(debug) else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def _read_source(source: str) -> str:
    """Читает шаблон из файла или из stdin ('-')."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise TemplexUserError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _run_tokenize(ns: argparse.Namespace) -> int:
    explicit = Path(ns.config) if ns.config else None
    config = load_config(Path.cwd(), explicit)
    text = _read_source(ns.source)

    result = collect_tokens(text, config.lexer, recover=ns.recover)

    if ns.text:
        for token in result.tokens:
            sys.stdout.write(f"{token!r}\n")
        for error in result.errors:
            sys.stderr.write(f"{error.kind.value}: {error}\n")
    else:
        report = TokenizeReport.from_result(ns.source, result)
        sys.stdout.write(jdumps(report.model_dump(mode="json")))

    return 0 if result.ok else 1


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.debug)

    try:
        if ns.cmd == "tokenize":
            return _run_tokenize(ns)

        if ns.cmd == "keywords":
            sys.stdout.write(jdumps({"keywords": [kw.value for kw in Keyword]}))
            return 0

    except TemplexUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
