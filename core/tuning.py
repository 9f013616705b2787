"""core/tuning.py — Data-driven tuning constants.

Gameplay numbers (attack range, pick radius, player size, enemy stat
presets, camera zoom limits) live in ``data/tuning.toml`` and are
loaded once at startup.  Any system reads a value with::

    from core.tuning import get
    reach = get("targeting", "attack_range", 2.5)

Every call site passes its own default, so a missing file or key never
stops the game.  ``reload()`` re-reads the file (F5 in the dungeon
scene).  ``override()`` pins a value in memory, which tests use to
get fixed ranges without touching the file.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    try:
        import tomli as tomllib            # pip install tomli
    except ModuleNotFoundError:
        tomllib = None                     # type: ignore[assignment]


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        path = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"
    else:
        path = Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    if tomllib is None:
        print("[TUNING] No TOML parser available (need Python 3.11+ or `pip install tomli`)")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def _walk(section_path: str) -> dict | None:
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"enemies.strong"`` looks up ``[enemies.strong]``.

    >>> get("targeting", "no_such_key", 1.25)
    1.25
    """
    node = _walk(section)
    if node is None:
        return default
    return node.get(key, default)


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _walk(section_path)
    return dict(node) if node is not None else {}


def override(section_path: str, key: str, value) -> None:
    """Set *key* in *section_path* in memory, creating tables as needed."""
    node = _data
    for part in section_path.split("."):
        node = node.setdefault(part, {})
    node[key] = value


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
