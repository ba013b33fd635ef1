
"""Best-score persistence: a JSON file under ~/.tetris, or memory"""
import json
from pathlib import Path
from typing import Dict, Union


class ScoreStoreError(Exception):
    pass


class MemoryScoreStore:
    def __init__(self, best: int = 0):
        self.data: Dict[str, int] = {"best": best}

    def get_best(self) -> int:
        return self.data["best"]

    def set_best(self, score: int):
        self.data["best"] = int(score)


class JsonScoreStore:
    """Stores ``{"best": <int>}``. A missing file reads as 0."""
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def get_best(self) -> int:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise ScoreStoreError(f"cannot read {self.path}: {e}") from e
        try:
            best = json.loads(raw)["best"]
        except (ValueError, KeyError, TypeError) as e:
            raise ScoreStoreError(f"malformed best score file {self.path}") from e
        if not isinstance(best, int) or isinstance(best, bool):
            raise ScoreStoreError(f"best score in {self.path} is not an integer")
        return best

    def set_best(self, score: int):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"best": int(score)}), encoding="utf-8")
