"""
Structured JSON Logging
Every entry is a JSON object; entries carrying a run_id are grouped into
one file per run for tracing a whole command stream.

File layout:
    logs/runs/YYYY-MM-DD/<run_id>.jsonl          grouped per run
    logs/<subfolder>/<service>_YYYY-MM-DD.jsonl   per service
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
import threading

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")


def _env_level(name: str, default: str) -> str:
    """Level name from the environment; unknown values fall back to default."""
    level = os.getenv(name, default).strip().upper()
    return level if level in _LEVELS else default


class StructuredLogger:
    """
    Provides structured JSON logging grouped by run_id.

    Run file format (one JSON object per line, appended as the run goes):
        {"run_id": "...", "event": "run_start", "ts": "..."}
        {"ts": "...", "service": "...", "level": "...", "message": "...", ...}
        ...
        {"run_id": "...", "event": "run_end", "ts": "..."}

    Console output goes through the stdlib logger to stderr and is only
    enabled with CONSOLE_LOG_LEVEL=DEBUG, so it never mixes with command
    reports or diagnostics during a normal run.
    """

    # Class-level registry of open runs (run_id -> run file)
    _run_files: Dict[str, Path] = {}
    _run_lock = threading.Lock()

    # Service to subfolder mapping
    _SERVICE_FOLDERS = {
        "cli": "cli",
        "reader": "cli",
        "executor": "robot",
        "command_parser": "robot",
        "verify": "verification",
        "yaml_converter": "verification",
    }

    def __init__(self, service_name: str, log_dir: Optional[str] = None):
        """
        Initialize structured logger for a specific service.

        Args:
            service_name: Component name (cli, executor, verify, ...)
            log_dir: Directory for JSON log files (default: $LOG_DIR or "logs")
        """
        self.service_name = service_name
        self.log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
        self.write_files = _env_flag("LOG_TO_FILE", "true")
        self.runs_dir = self.log_dir / "runs"

        subfolder = self._SERVICE_FOLDERS.get(service_name, "other")
        self.service_log_dir = self.log_dir / subfolder
        today = datetime.now().strftime("%Y-%m-%d")
        self.service_log_file = self.service_log_dir / f"{service_name}_{today}.jsonl"

        if self.write_files:
            self.runs_dir.mkdir(parents=True, exist_ok=True)
            self.service_log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(f"toy_robot.{service_name}")
        self.logger.setLevel(_env_level("LOG_LEVEL", "INFO"))
        self.logger.propagate = False

        console_log_level = _env_level("CONSOLE_LOG_LEVEL", "WARNING")
        if not self.logger.handlers:
            if console_log_level == "DEBUG":
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(
                    logging.Formatter("[%(name)s] %(levelname)s %(message)s")
                )
                self.logger.addHandler(console_handler)
            else:
                # Keeps logging.lastResort from printing warnings to stderr
                self.logger.addHandler(logging.NullHandler())

    def _get_run_file_path(self, run_id: str) -> Path:
        """Get the file path for a specific run."""
        today = datetime.now().strftime("%Y-%m-%d")
        date_dir = self.runs_dir / today
        date_dir.mkdir(parents=True, exist_ok=True)
        return date_dir / f"{run_id}.jsonl"

    def _append_run_log(self, run_id: str, record: Dict[str, Any]):
        """Append one record to the run file, opening the run on first use."""
        with self._run_lock:
            run_file = self._run_files.get(run_id)
            lines = []
            if run_file is None:
                run_file = self._get_run_file_path(run_id)
                self._run_files[run_id] = run_file
                lines.append({"run_id": run_id, "event": "run_start", "ts": _utc_now()})
            lines.append(record)
            with open(run_file, "a") as f:
                for line in lines:
                    f.write(json.dumps(line, default=str) + "\n")

    def log_json(
        self,
        level: str,
        message: str,
        run_id: Optional[str] = None,
        **extra_fields: Any
    ) -> None:
        """
        Write structured JSON log entry, grouped by run_id when given.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Human-readable log message
            run_id: UUIDv4 of the CLI run (groups entries in one file)
            **extra_fields: Additional context-specific fields
        """
        level = level.upper()
        numeric_level = logging.getLevelName(level)
        if not isinstance(numeric_level, int) or not self.logger.isEnabledFor(numeric_level):
            return

        log_entry: Dict[str, Any] = {
            "ts": _utc_now(),
            "service": self.service_name,
            "level": level,
            "message": message,
        }
        log_entry.update(extra_fields)

        if self.write_files:
            if run_id:
                self._append_run_log(run_id, log_entry)

            service_entry = dict(log_entry, run_id=run_id)
            with open(self.service_log_file, "a") as f:
                f.write(json.dumps(service_entry, default=str) + "\n")

        extra_msg = " | ".join(f"{k}={v}" for k, v in extra_fields.items() if v is not None)
        full_message = f"{message} | {extra_msg}" if extra_msg else message
        self.logger.log(numeric_level, full_message)

    def end_run(self, run_id: str) -> None:
        """Close the run: append the run_end marker and forget the run."""
        if self.write_files and run_id in self._run_files:
            self._append_run_log(run_id, {"run_id": run_id, "event": "run_end", "ts": _utc_now()})
        with self._run_lock:
            self._run_files.pop(run_id, None)

    def debug(self, message: str, **kwargs):
        """Log DEBUG level message."""
        self.log_json("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log INFO level message."""
        self.log_json("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log WARNING level message."""
        self.log_json("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log ERROR level message."""
        self.log_json("ERROR", message, **kwargs)


def get_logger(service_name: str) -> StructuredLogger:
    """
    Factory function to get a structured logger for a service.

    Args:
        service_name: Component name (cli, executor, verify, ...)

    Returns:
        StructuredLogger instance configured for the service

    Example:
        >>> logger = get_logger("executor")
        >>> logger.info("Robot placed", run_id="abc-123", x=0, y=0)
    """
    return StructuredLogger(service_name)
