"""Logger structuré des étapes de capture."""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any

from pagestitch.config import PATHS


@dataclass
class StepLog:
    """Log d'une étape de la machine d'état."""
    timestamp: str
    state: str
    message: str
    metadata: Dict[str, Any]


@dataclass
class TileLog:
    """Log d'une tuile capturée."""
    timestamp: str
    index: int
    requested: tuple
    achieved: tuple
    size: tuple
    reused: bool


class CaptureDebugLogger:
    """Logger structuré pour le debug des captures (fichiers JSON lines)."""

    def __init__(self, log_dir: str = PATHS['logs'], enabled: bool = True):
        self.enabled = enabled
        self.log_dir = Path(log_dir)
        if self.enabled:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self.steps: List[StepLog] = []
        self.tiles: List[TileLog] = []

    def log_step(self, state: str, message: str = "", **metadata: Any) -> None:
        """Log une transition d'état."""
        log = StepLog(
            timestamp=datetime.now().isoformat(),
            state=state,
            message=message,
            metadata=metadata,
        )
        self.steps.append(log)
        self._write_log("steps", asdict(log))

    def log_tile(
        self,
        index: int,
        requested: tuple,
        achieved: tuple,
        size: tuple,
        reused: bool = False,
    ) -> None:
        """Log une tuile."""
        log = TileLog(
            timestamp=datetime.now().isoformat(),
            index=index,
            requested=requested,
            achieved=achieved,
            size=size,
            reused=reused,
        )
        self.tiles.append(log)
        self._write_log("tiles", asdict(log))

    def save_session(self) -> Optional[str]:
        """Sauvegarde la session complète."""
        if not self.enabled:
            return None
        session_file = self.log_dir / f"capture_{self.session_id}.json"
        data = {
            "session_id": self.session_id,
            "steps": [asdict(s) for s in self.steps],
            "tiles": [asdict(t) for t in self.tiles],
        }
        with open(session_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        return str(session_file)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "steps": len(self.steps),
            "tiles": len(self.tiles),
            "reused_tiles": sum(1 for t in self.tiles if t.reused),
            "states": [s.state for s in self.steps],
        }

    def _write_log(self, log_type: str, data: Dict[str, Any]) -> None:
        if not self.enabled:
            return
        log_file = self.log_dir / f"{log_type}_{self.session_id}.jsonl"
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False, default=str) + "\n")
