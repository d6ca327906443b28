from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


def _write(p: Path, text: str) -> Path:
    """Записывает текст в файл, создавая родительские директории при необходимости."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture
def write():
    return _write


@pytest.fixture
def tmpproj(tmp_path: Path, monkeypatch) -> Path:
    """Минимальный проект: templex.yaml и пара шаблонов в рабочем каталоге."""
    root = tmp_path
    _write(
        root / "templex.yaml",
        textwrap.dedent("""
        lexer:
          single_char_operators: emit
          strict_eof: true
        """).strip() + "\n",
    )
    _write(root / "ok.tpl", "Hello {{ name }}!\n{% if admin %}root{% endif %}\n")
    _write(root / "bad.tpl", "A {{ x %} B {{ y }}")
    monkeypatch.chdir(root)
    return root
