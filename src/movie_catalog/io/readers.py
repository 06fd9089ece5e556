from pathlib import Path
import json
from typing import Any

def _ensure_exists(path: Path):
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"file not found: {p}")

def read_json(path: Path) -> Any:
    """Parse a JSON file. Raises json.JSONDecodeError on malformed content."""
    _ensure_exists(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
