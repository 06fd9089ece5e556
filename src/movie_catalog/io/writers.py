from pathlib import Path
import json
import os
from typing import Any

def atomic_write_json(data: Any, out: Path, indent: int = 2) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
    tmp.replace(out)             # atomic replace on same filesystem
