# image_grouper/utils/logging_config.py

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

from image_grouper.config import SystemConfig

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


def setup_logging(config: SystemConfig):
    """
    Configure the root logger.

    Logs go to stderr so stdout only carries the scan output, plus a
    rotating file under `config.log_dir` when one is set.
    """
    if config.log_format == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "image_grouper.log",
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5
        )
        if config.log_format == 'json':
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        handlers=handlers,
        force=True
    )


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for the optional structured log"""

    def format(self, record):
        entry = {
            'time': datetime.fromtimestamp(record.created).isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)
