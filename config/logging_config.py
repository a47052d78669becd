from dataclasses import dataclass
from typing import Optional

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

@dataclass(frozen=True)
class LoggingConfig:
    log_level: str = "WARNING"
    log_format: str = "{time:YYYY-MM-DD HH:mm:ss.SSS!UTC} {level} {extra[name]} {function}:{line} {message}"
    log_file: Optional[str] = None
    log_file_level: str = "DEBUG"
    log_rotation: str = "10 MB"
    log_retention: str = "10 days"
    log_compression: str = "zip"

LOGGING_CONFIG = LoggingConfig()
