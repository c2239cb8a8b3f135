"""Logging setup for the chart generator."""

import json
import logging
import sys
from typing import Any, Dict, List


def configure_logging(level: str = 'INFO', json_format: bool = False) -> None:
    """Configure root logging with a deterministic format."""
    level_value = getattr(logging, level.upper(), logging.INFO)

    # stdout is left to command output
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if json_format:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            datefmt='%Y-%m-%dT%H:%M:%S',
        )

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level_value, handlers=handlers, force=True)


class _JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'ts': self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'name': record.name,
            'msg': record.getMessage(),
        }
        return json.dumps(payload, sort_keys=True)
