import logging
from logging.handlers import RotatingFileHandler
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Send service logs to stderr, and to a rotating file when LOG_FILE is set."""
    # Leave an existing configuration alone (uvicorn --log-config, pytest)
    if not logging.getLogger().handlers:
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if log_file:
            handlers.append(RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"))
        logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT, handlers=handlers)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
