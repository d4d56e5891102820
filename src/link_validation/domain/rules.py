DEFAULT_WIKI_BASE = "https://nomanssky.fandom.com/wiki/"


def build_canonical_url(name: str | None, base_url: str = DEFAULT_WIKI_BASE) -> str:
    # Must match the UI link rule exactly: spaces -> underscores, no escaping.
    suffix = (name or "").replace(" ", "_")
    return f"{base_url}{suffix}"


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def is_redirect_status(status: int) -> bool:
    return 300 <= status < 400


def is_method_rejected(status: int) -> bool:
    """Servers that refuse HEAD tend to answer 403 or 405."""
    return status in (403, 405)
