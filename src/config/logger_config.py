import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from loguru import logger

# .env has to be read before the sink level and directory are chosen
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_LOG_DIR = Path("logs")
DEFAULT_LOG_LEVEL = "INFO"


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_dir: str | Path = DEFAULT_LOG_DIR,
    compression: str | None = "zip",
) -> int:
    """Replace all sinks with one rotating file sink and return its id.

    stderr is reserved for the human-readable progress and report.
    """
    log_file = Path(log_dir) / "link_validation_{time}.log"
    logger.remove()
    return logger.add(
        log_file,
        rotation="256 MB",
        retention="10 days",
        compression=compression,
        encoding="utf-8",
        level=level.upper(),
        enqueue=True,
    )


configure_logging(
    os.getenv("VALIDATE_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    os.getenv("VALIDATE_LOG_DIR") or DEFAULT_LOG_DIR,
)
