"""Persisted-state manager.

Keeps a bounded in-memory history of consciousness snapshots and evolution
records, and optionally appends every record as a JSON line to a log file.
The manager never reads agent internals; it only receives snapshots.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from lia.errors import PersistenceFailure

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import ConsciousnessState

logger = logging.getLogger(__name__)


@dataclass
class EvolutionRecord:
    """One recorded evolution stage."""

    stage: int
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class StateManager:
    """Records snapshots and evolution stages.

    Attributes:
        history: Most recent snapshots, oldest first
        evolutions: Most recent evolution records, oldest first
        path: JSON-lines log file, or None for memory only
    """

    def __init__(self, config: "SystemConfiguration"):
        self.history: deque["ConsciousnessState"] = deque(maxlen=config.history_size)
        self.evolutions: deque[EvolutionRecord] = deque(maxlen=config.history_size)
        self.path: Optional[Path] = Path(config.state_path) if config.state_path else None
        # Serializes appends so log lines never interleave
        self._lock = asyncio.Lock()

    @property
    def latest(self) -> Optional["ConsciousnessState"]:
        return self.history[-1] if self.history else None

    @property
    def latest_stage(self) -> Optional[int]:
        return self.evolutions[-1].stage if self.evolutions else None

    async def update_state(self, state: "ConsciousnessState") -> None:
        """Record a snapshot.

        Raises:
            PersistenceFailure: If the log file cannot be written
        """
        async with self._lock:
            self.history.append(state)
            await self._append("update_state", {"type": "state", "state": state.model_dump(mode="json")})

    async def record_evolution(self, stage: int) -> None:
        """Record a new evolution stage.

        Raises:
            PersistenceFailure: If the stage is invalid or the log cannot be written
        """
        if stage < 1:
            raise PersistenceFailure("record_evolution", f"invalid evolution stage {stage}")
        async with self._lock:
            record = EvolutionRecord(stage=stage)
            self.evolutions.append(record)
            await self._append(
                "record_evolution",
                {"type": "evolution", "stage": stage, "recorded_at": record.recorded_at.isoformat()},
            )

    async def _append(self, operation: str, record: dict[str, Any]) -> None:
        if self.path is None:
            return
        line = json.dumps(record, sort_keys=True)
        try:
            await asyncio.to_thread(self._write_line, line)
        except OSError as e:
            logger.error("Failed to persist %s to %s: %s", operation, self.path, e)
            raise PersistenceFailure(operation, str(e)) from e

    def _write_line(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")

    def read_log(self) -> list[dict[str, Any]]:
        """Read every record from the log file; empty if there is no log yet.

        Raises:
            PersistenceFailure: If the file exists but cannot be read or parsed
        """
        if self.path is None or not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return [json.loads(line) for line in fh if line.strip()]
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceFailure("read_log", str(e)) from e
