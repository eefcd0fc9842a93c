"""Monitoring module for tracking top airing pipeline runs."""
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class RunSource(str, Enum):
    CACHE = "cache"
    LIVE = "live"
    FALLBACK = "fallback"


class PipelineRunLog(BaseModel):
    """Single top airing pipeline run for monitoring."""

    run_id: str
    timestamp: str
    source: RunSource
    item_count: int
    trailers_found: int
    lookups_performed: int = 0
    latency_ms: float
    error_message: Optional[str] = None


class PipelineRunLogger:
    """Logs pipeline runs to a JSON Lines file for analysis."""

    def __init__(self, log_dir: Path = Path("logs")):
        """Initialize logger with target directory."""
        self.log_dir = log_dir
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / "pipeline_runs.jsonl"
        logger.info(f"PipelineRunLogger initialized: {self.log_file}")

    def generate_run_id(self) -> str:
        """Generate a unique run identifier."""
        return str(uuid.uuid4())[:8]

    def log(self, run: PipelineRunLog) -> None:
        """Append run entry to log file."""
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(run.model_dump_json() + "\n")
        except OSError as e:
            logger.error(f"Failed to write pipeline run log: {e}")

    def create_log_entry(
        self,
        source: RunSource,
        item_count: int,
        trailers_found: int,
        latency_ms: float,
        lookups_performed: int = 0,
        error_message: Optional[str] = None
    ) -> PipelineRunLog:
        """Create a PipelineRunLog with auto-generated timestamp and run ID."""
        return PipelineRunLog(
            run_id=self.generate_run_id(),
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=source,
            item_count=item_count,
            trailers_found=trailers_found,
            lookups_performed=lookups_performed,
            latency_ms=latency_ms,
            error_message=error_message
        )
