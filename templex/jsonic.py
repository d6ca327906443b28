from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Сериализует отчёт `templex tokenize` / `templex keywords` в одну строку JSON.

    ensure_ascii=False: текст шаблона (TEXT_CONTENT, строковые литералы)
    выводится как есть, без \\u-экранирования.
    """
    return json.dumps(obj, ensure_ascii=False)
