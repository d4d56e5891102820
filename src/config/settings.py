# Environment-driven tunables for the link validator

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from src.link_validation.domain.errors import SettingsError
from src.link_validation.domain.rules import DEFAULT_WIKI_BASE

# resolved from the package, not the working directory
DEFAULT_DATASET_PATH = Path(__file__).resolve().parents[1] / "assets" / "galaxies.json"
DEFAULT_LOG_DIR = Path("logs")


@dataclass(frozen=True)
class ValidatorSettings:
    max_concurrency: int = 8
    request_timeout_ms: int = 10000  # per hop
    max_redirects: int = 5
    batch_size: int = 10
    batch_pause_ms: int = 750
    # ~3 request starts per second
    min_start_interval_ms: int = 300
    dataset_path: Path = DEFAULT_DATASET_PATH
    base_url: str = DEFAULT_WIKI_BASE
    log_level: str = "INFO"
    log_dir: Path = DEFAULT_LOG_DIR


def _read_int(env: dict[str, str], key: str, default: int, minimum: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip(), 10)
    except ValueError as exc:
        raise SettingsError(f"{key} must be an integer, got {raw!r}") from exc
    return max(minimum, value)


def load_settings(
    environ: dict[str, str] | None = None,
    *,
    use_dotenv: bool = True,
    dotenv_path: str | Path | None = None,
) -> ValidatorSettings:
    if environ is None:
        if use_dotenv:
            path = dotenv_path or find_dotenv(usecwd=True)
            if path:
                load_dotenv(path)
        environ = dict(os.environ)

    return ValidatorSettings(
        max_concurrency=_read_int(environ, "VALIDATE_MAX_CONCURRENCY", 8, 1),
        request_timeout_ms=_read_int(environ, "VALIDATE_REQUEST_TIMEOUT_MS", 10000, 1),
        max_redirects=_read_int(environ, "VALIDATE_MAX_REDIRECTS", 5, 0),
        batch_size=_read_int(environ, "VALIDATE_BATCH_SIZE", 10, 1),
        batch_pause_ms=_read_int(environ, "VALIDATE_BATCH_PAUSE_MS", 750, 0),
        min_start_interval_ms=_read_int(environ, "VALIDATE_MIN_INTERVAL_MS", 300, 0),
        dataset_path=Path(environ.get("VALIDATE_DATASET_PATH") or DEFAULT_DATASET_PATH),
        base_url=environ.get("VALIDATE_BASE_URL") or DEFAULT_WIKI_BASE,
        log_level=(environ.get("VALIDATE_LOG_LEVEL") or "INFO").strip().upper(),
        log_dir=Path(environ.get("VALIDATE_LOG_DIR") or DEFAULT_LOG_DIR),
    )
