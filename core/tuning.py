"""core/tuning.py — Gameplay numbers from ``data/tuning.toml``.

Read a value anywhere with::

    from core.tuning import get
    speed = get("pursuer", "speed", 1.2)

Each caller supplies the stock value as the default, so a missing file
or key just means stock behaviour.  Nested tables use dotted section
names (``get("messages.durations", "kill", 1.2)``).

F5 in the maze scene calls ``reload()``; tests pin numbers with
``override()`` and restore with ``load()``.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"

_data: dict = {}
_path: Path = DEFAULT_PATH


def load(path: str | Path | None = None) -> None:
    """Read *path* (default ``data/tuning.toml``), replacing current values."""
    global _data, _path
    _path = Path(path) if path is not None else DEFAULT_PATH

    if not _path.exists():
        print(f"[TUNING] {_path} missing, running on defaults")
        _data = {}
        return

    with open(_path, "rb") as f:
        _data = tomllib.load(f)
    print(f"[TUNING] {_count_leaves(_data)} values from {_path.name}")


def reload() -> None:
    load(_path)


def override(data: dict) -> None:
    """Use *data* in place of the file contents until the next ``load()``."""
    global _data
    _data = data


def _table(section_path: str) -> dict | None:
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """``[section] key`` or *default*.

    >>> get("scoring", "goal_base", 500)
    500
    """
    table = _table(section)
    if table is None:
        return default
    return table.get(key, default)


def _count_leaves(d: dict) -> int:
    return sum(_count_leaves(v) if isinstance(v, dict) else 1 for v in d.values())
