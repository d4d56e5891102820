import sys
from typing import TextIO

from tqdm import tqdm

from src.link_validation.application.ports import ProgressPort
from src.link_validation.domain.models import LinkCheckResult, RunSummary

PROGRESS_LINE_EVERY = 25
MAX_LISTED_INVALID = 50


class RunAggregator:
    """Collects results in arrival order and keeps the run summary current."""

    def __init__(self, total: int, progress: ProgressPort | None = None) -> None:
        self.summary = RunSummary(total=total)
        self.progress = progress

    def record(self, item: LinkCheckResult) -> None:
        self.summary.completed += 1
        if item.valid:
            self.summary.valid_count += 1
        else:
            self.summary.invalid.append(item)
        if self.progress is not None:
            self.progress.advance(self.summary.completed, self.summary.total)


class ProgressReporter:
    """Human-facing output: progress and failures on stderr, success on stdout.

    On an interactive terminal progress is a tqdm bar updated in place;
    otherwise a plain line is written every ``line_every`` completions.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        out: TextIO | None = None,
        *,
        enabled: bool = True,
        is_tty: bool | None = None,
        line_every: int = PROGRESS_LINE_EVERY,
        max_listed: int = MAX_LISTED_INVALID,
    ) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.out = out if out is not None else sys.stdout
        self.enabled = enabled
        if is_tty is None:
            isatty = getattr(self.stream, "isatty", None)
            is_tty = bool(isatty()) if callable(isatty) else False
        self.is_tty = is_tty
        self.line_every = max(1, line_every)
        self.max_listed = max_listed
        self._bar: tqdm | None = None
        self._last = 0

    def start(self, total: int) -> None:
        print(f"Validating {total} galaxies...", file=self.stream)
        if self.enabled and self.is_tty:
            self._bar = tqdm(total=total, desc="Progress", unit="link", file=self.stream, leave=True)

    def advance(self, completed: int, total: int) -> None:
        if not self.enabled:
            return
        if self._bar is not None:
            self._bar.update(completed - self._last)
            self._last = completed
            return
        if completed % self.line_every == 0 or completed == total:
            pct = (completed * 100) // total if total else 100
            print(f"Progress: {completed}/{total} ({pct}%)", file=self.stream)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def report_success(self, summary: RunSummary) -> None:
        print(f"All {summary.total} galaxy links are valid.", file=self.out)

    def report_failures(self, invalid: list[LinkCheckResult]) -> None:
        print(f"\nInvalid links ({len(invalid)}):", file=self.stream)
        for item in invalid[: self.max_listed]:
            print(f"- [{item.record_id}] {item.name} -> {item.url} :: {item.reason}", file=self.stream)
        if len(invalid) > self.max_listed:
            print(f"... and {len(invalid) - self.max_listed} more", file=self.stream)
