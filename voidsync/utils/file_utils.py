import json
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any


def atomic_write_json(path: Path, data: Any) -> None:
    """Serialize data to JSON and write it atomically using temp file and rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f".{path.name}.{uuid.uuid4()}.tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())

        max_retries = 10
        if sys.platform == "win32":
            for i in range(max_retries):
                try:
                    os.replace(temp_path, path)
                    break
                except OSError:
                    if i == max_retries - 1:
                        raise
                    time.sleep(0.05)
        else:
            os.replace(temp_path, path)

    except Exception:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


def read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
