from typing import Any

from yarl import URL

from src.config.logger_config import logger
from src.link_validation.application.ports import ProberPort
from src.link_validation.domain.models import ProbeResult
from src.link_validation.domain.rules import (
    is_method_rejected,
    is_redirect_status,
    is_success_status,
)

TOO_MANY_REDIRECTS = "too many redirects"
INVALID_REDIRECT_LOCATION = "invalid redirect location"


def resolve_location(current_url: str, location: str) -> str | None:
    """Resolve a Location header against the URL that produced it."""
    try:
        target = URL(location)
        # "https://" alone would otherwise join back onto the current URL
        if target.scheme and not target.host:
            return None
        resolved = URL(current_url).join(target)
    except (TypeError, ValueError):
        return None
    if not resolved.is_absolute() or resolved.scheme not in ("http", "https") or not resolved.host:
        return None
    return str(resolved)


class LinkResolver:
    """Follows redirects and HEAD->GET fallback until a terminal verdict.

    Each hop starts with HEAD. A 403/405 answer to HEAD earns exactly one GET
    retry on the same URL; every redirect resets the method back to HEAD.
    Transport failures and timeouts are terminal.
    """

    def __init__(self, prober: ProberPort, *, timeout_ms: int = 10000, max_redirects: int = 5) -> None:
        self.prober = prober
        self.timeout_ms = timeout_ms
        self.max_redirects = max_redirects

    async def resolve(self, session: Any, url: str) -> ProbeResult:
        current_url = url
        redirects_taken = 0
        method = "HEAD"

        while True:
            outcome = await self.prober.probe(session, current_url, method, self.timeout_ms)
            if not outcome.ok:
                return ProbeResult(
                    url=current_url,
                    valid=False,
                    reason=outcome.error or "request failed",
                    redirects_taken=redirects_taken,
                )

            status = int(outcome.status_code or 0)
            logger.debug("{} {} -> {}", method, current_url, status)

            if is_success_status(status):
                return ProbeResult(
                    url=current_url,
                    valid=True,
                    status_code=status,
                    redirects_taken=redirects_taken,
                )

            if is_method_rejected(status) and method == "HEAD":
                method = "GET"
                continue

            location = outcome.headers.get("Location") if outcome.headers else None
            if is_redirect_status(status) and location:
                if redirects_taken >= self.max_redirects:
                    return ProbeResult(
                        url=current_url,
                        valid=False,
                        reason=TOO_MANY_REDIRECTS,
                        status_code=status,
                        redirects_taken=redirects_taken,
                    )
                resolved = resolve_location(current_url, location)
                if resolved is None:
                    return ProbeResult(
                        url=current_url,
                        valid=False,
                        reason=INVALID_REDIRECT_LOCATION,
                        status_code=status,
                        redirects_taken=redirects_taken,
                    )
                current_url = resolved
                redirects_taken += 1
                method = "HEAD"
                continue

            return ProbeResult(
                url=current_url,
                valid=False,
                reason=f"HTTP {status}",
                status_code=status,
                redirects_taken=redirects_taken,
            )
