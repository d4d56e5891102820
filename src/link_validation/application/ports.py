from typing import Any, Protocol, runtime_checkable

from src.link_validation.domain.models import ProbeOutcome


@runtime_checkable
class ProberPort(Protocol):
    async def probe(self, session: Any, url: str, method: str = "HEAD", timeout_ms: int = 10000) -> ProbeOutcome: ...
    """Issue one request and report its outcome without raising."""


@runtime_checkable
class ProgressPort(Protocol):
    def start(self, total: int) -> None: ...

    def advance(self, completed: int, total: int) -> None: ...

    def close(self) -> None: ...

