import asyncio
from dataclasses import dataclass
from typing import Any, Sequence

import aiohttp
from src.config.logger_config import logger

from src.link_validation.application.limiter import ConcurrencyLimiter
from src.link_validation.application.ports import ProberPort, ProgressPort
from src.link_validation.application.reporter import RunAggregator
from src.link_validation.application.resolver import LinkResolver
from src.link_validation.application.throttle import StartThrottle
from src.link_validation.domain.errors import DatasetError
from src.link_validation.domain.models import GalaxyRecord, LinkCheckResult, RunSummary
from src.link_validation.domain.rules import DEFAULT_WIKI_BASE, build_canonical_url
from src.link_validation.infrastructure.http_prober import HttpProber


@dataclass(frozen=True)
class ValidateWorkflowConfig:
    max_concurrency: int = 8
    request_timeout_ms: int = 10000
    max_redirects: int = 5
    batch_size: int = 10
    batch_pause_ms: int = 750
    min_start_interval_ms: int = 300
    base_url: str = DEFAULT_WIKI_BASE
    connector_limit: int = 0
    connector_limit_per_host: int = 10
    connector_ttl_dns_cache: int = 300


class ValidateLinksWorkflow:
    def __init__(
        self,
        prober: ProberPort | None = None,
        progress: ProgressPort | None = None,
        config: ValidateWorkflowConfig | None = None,
        session: Any | None = None,
    ) -> None:
        self.prober = prober or HttpProber()
        self.progress = progress
        self.config = config or ValidateWorkflowConfig()
        self.session = session
        self.resolver = LinkResolver(
            self.prober,
            timeout_ms=self.config.request_timeout_ms,
            max_redirects=self.config.max_redirects,
        )

    @property
    def connector_limit_per_host(self) -> int:
        # a smaller pool would queue admitted requests inside the connector
        return max(self.config.connector_limit_per_host, self.config.max_concurrency)

    async def run(self, records: Sequence[GalaxyRecord]) -> RunSummary:
        if not records:
            raise DatasetError("No records to validate.")

        if self.session is not None:
            return await self._run_batches(self.session, records)

        connector = aiohttp.TCPConnector(
            limit=self.config.connector_limit,
            limit_per_host=self.connector_limit_per_host,
            ttl_dns_cache=self.config.connector_ttl_dns_cache,
        )
        async with aiohttp.ClientSession(connector=connector) as session:
            return await self._run_batches(session, records)

    async def _run_batches(self, session: Any, records: Sequence[GalaxyRecord]) -> RunSummary:
        # throttle and limiter state live for exactly one run
        throttle = StartThrottle(self.config.min_start_interval_ms)
        limiter = ConcurrencyLimiter(self.config.max_concurrency)
        aggregator = RunAggregator(total=len(records), progress=self.progress)
        batch_size = self.config.batch_size
        total_batches = (len(records) + batch_size - 1) // batch_size

        logger.info(
            "Validating {} links: batch_size={}, max_concurrency={}, min_start_interval_ms={}",
            len(records),
            batch_size,
            self.config.max_concurrency,
            self.config.min_start_interval_ms,
        )
        if self.progress is not None:
            self.progress.start(len(records))

        try:
            for batch_index, i in enumerate(range(0, len(records), batch_size), start=1):
                batch = records[i : i + batch_size]
                await asyncio.gather(
                    *(
                        limiter.run(
                            lambda record=record: self._check_record(session, throttle, aggregator, record)
                        )
                        for record in batch
                    )
                )
                logger.info(
                    "Batch {}/{} done: completed={}, invalid={}, peak_in_flight={}",
                    batch_index,
                    total_batches,
                    aggregator.summary.completed,
                    aggregator.summary.invalid_count,
                    limiter.peak,
                )
                if i + batch_size < len(records):
                    await asyncio.sleep(self.config.batch_pause_ms / 1000)
        finally:
            if self.progress is not None:
                self.progress.close()

        return aggregator.summary

    async def _check_record(
        self,
        session: Any,
        throttle: StartThrottle,
        aggregator: RunAggregator,
        record: GalaxyRecord,
    ) -> LinkCheckResult:
        url = build_canonical_url(record.name, self.config.base_url)
        await throttle.await_turn()
        result = await self.resolver.resolve(session, url)
        if not result.valid:
            logger.warning("Invalid link for [{}] {}: {} ({})", record.id, record.name, result.url, result.reason)
        item = LinkCheckResult(record_id=record.id, name=record.name, result=result)
        logger.debug("Link checked: {}", item.to_dict())
        aggregator.record(item)
        return item
