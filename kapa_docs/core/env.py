from __future__ import annotations

import os
from pathlib import Path

QUOTE_CHARS = ('"', "'")


def load_dotenv_file(path: str | Path = ".env") -> dict[str, str] | None:
    """Apply KEY=VALUE pairs from ``path`` without overriding the environment.

    Returns the pairs read from the file, or None when there is no file.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return None

    pairs = dict(_parse_pairs(env_path.read_text(encoding="utf-8")))
    for key, value in pairs.items():
        os.environ.setdefault(key, value)
    return pairs


def _parse_pairs(text: str):
    for raw_line in text.splitlines():
        line = raw_line.strip().removeprefix("export ").lstrip()
        if line.startswith("#"):
            continue
        key, separator, value = line.partition("=")
        key = key.strip()
        if separator and key:
            yield key, _unquote(value.strip())


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value
