import asyncio

import aiohttp
from aiohttp import ClientConnectorError, ClientError, ServerDisconnectedError
from src.config.logger_config import logger

from src.link_validation.domain.models import ProbeOutcome

USER_AGENT = "link-validator/1.0"


class HttpProber:
    """Issues exactly one request per call; redirects are left to the caller."""

    def __init__(self, user_agent: str = USER_AGENT) -> None:
        self.headers = {"User-Agent": user_agent}

    async def probe(
        self,
        session: aiohttp.ClientSession,
        url: str,
        method: str = "HEAD",
        timeout_ms: int = 10000,
    ) -> ProbeOutcome:
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        try:
            async with session.request(
                method,
                url,
                headers=self.headers,
                allow_redirects=False,
                timeout=timeout,
            ) as resp:
                # body is never read; leaving the context releases the connection
                return ProbeOutcome.success(resp.status, resp.headers)
        except asyncio.TimeoutError:
            logger.debug("{} {} timed out after {}ms", method, url, timeout_ms)
            return ProbeOutcome.failure("timeout")
        except (ClientConnectorError, ServerDisconnectedError) as exc:
            logger.debug("{} {} connection failed: {}", method, url, exc)
            return ProbeOutcome.failure(str(exc) or type(exc).__name__)
        except (ClientError, ValueError) as exc:
            # InvalidURL and malformed targets land here as well
            logger.debug("{} {} failed with {}: {}", method, url, type(exc).__name__, exc)
            return ProbeOutcome.failure(str(exc) or type(exc).__name__)
