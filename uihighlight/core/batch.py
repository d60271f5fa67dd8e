"""Batch orchestration: run every screenshot/dump pair and track one status.

The orchestrator owns a :class:`BatchState` that is rebuilt whenever the
uploads change or a run starts.  A run registers a placeholder for every
matched pair before the first suspension point, then processes all complete
pairs concurrently.  Each run carries a generation number; completions from a
superseded run are discarded instead of being written into the newer state.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..utils.export import build_archive
from ..vision.bounds import extract_leaf_bounds, parse_layout_dump
from ..vision.models import AnnotatedImage, HighlightStyle
from ..vision.overlay import render_annotated_image
from .config import config
from .exceptions import BatchNotReadyError
from .logger import log
from .pairing import FilePair, complete_pairs, has_title_mismatch, match_files
from .status import StatusMessage, compute_idle_status, loading_message
from .uploads import UploadedFile


class PairState(Enum):
    """Lifecycle of a single pair within a run."""
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PairResult:
    """Outcome slot for one pair name."""

    name: str
    state: PairState = PairState.PENDING
    image: Optional[AnnotatedImage] = None
    error: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def placeholder(self) -> str:
        return loading_message(self.name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "state": self.state.value}
        if self.state is PairState.PENDING:
            data["message"] = self.placeholder
        if self.image is not None:
            data.update(width=self.image.width, height=self.image.height, box_count=self.image.box_count)
        if self.error is not None:
            data["error"] = self.error
        if self.diagnostics:
            data["malformed_bounds"] = list(self.diagnostics)
        return data


@dataclass
class BatchReport:
    """Summary of a finished run."""

    status: StatusMessage
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "message": self.status.text,
            "succeeded": list(self.succeeded),
            "failed": dict(self.failed),
        }


@dataclass
class BatchState:
    """Mutable state of the current batch."""

    status: StatusMessage = StatusMessage.NO_MESSAGE
    pairs: List[FilePair] = field(default_factory=list)
    results: Dict[str, PairResult] = field(default_factory=dict)
    status_clear_handle: Optional[asyncio.TimerHandle] = None
    generation: int = 0


class BatchListener:
    """Receives batch events.  Override the hooks you care about."""

    def status_changed(self, status: StatusMessage) -> None:
        pass

    def pair_started(self, name: str) -> None:
        pass

    def pair_completed(self, name: str, image: AnnotatedImage) -> None:
        pass

    def pair_failed(self, name: str, error: str) -> None:
        pass

    def batch_finished(self, report: BatchReport) -> None:
        pass


class BatchOrchestrator:
    """Drive the highlight pipeline for uploaded screenshot/dump pairs."""

    def __init__(
        self,
        listener: Optional[BatchListener] = None,
        style: Optional[HighlightStyle] = None,
        status_clear_delay: Optional[float] = None,
    ) -> None:
        self.listener = listener or BatchListener()
        self.style = style
        self.status_clear_delay = (
            config.status_clear_delay if status_clear_delay is None else status_clear_delay
        )
        self.layout_dumps: List[UploadedFile] = []
        self.screenshots: List[UploadedFile] = []
        self.state = BatchState()
        self._generation = 0
        self.update_uploads([], [])

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    @property
    def status(self) -> StatusMessage:
        return self.state.status

    @property
    def idle_status(self) -> StatusMessage:
        """Status implied by the current upload counts alone."""
        return compute_idle_status(len(self.screenshots), len(self.layout_dumps))

    @property
    def can_generate(self) -> bool:
        return self.idle_status is StatusMessage.PROMPT_GENERATE

    def set_status(self, status: StatusMessage) -> None:
        """Set the aggregate status, cancelling any pending clear."""
        self._cancel_status_clear()
        previous = self.state.status
        self.state.status = status
        log.log_status_change(previous.name, status.name)
        self.listener.status_changed(status)

    def _cancel_status_clear(self) -> None:
        handle = self.state.status_clear_handle
        if handle is not None:
            handle.cancel()
            self.state.status_clear_handle = None

    def _schedule_status_clear(self) -> None:
        loop = asyncio.get_running_loop()
        self.state.status_clear_handle = loop.call_later(self.status_clear_delay, self._clear_status)

    def _clear_status(self) -> None:
        self.state.status_clear_handle = None
        self.set_status(StatusMessage.NO_MESSAGE)

    def _reset_state(self, pairs: Sequence[FilePair] = ()) -> BatchState:
        self._cancel_status_clear()
        self.state = BatchState(status=self.state.status, pairs=list(pairs), generation=self._generation)
        return self.state

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------
    def update_uploads(
        self,
        layout_dumps: Sequence[UploadedFile],
        screenshots: Sequence[UploadedFile],
    ) -> StatusMessage:
        """Replace both upload collections and recompute the idle status.

        An in-flight run keeps going, but its results are no longer recorded.
        """
        self.layout_dumps = list(layout_dumps)
        self.screenshots = list(screenshots)
        self._generation += 1
        self._reset_state()
        status = self.idle_status
        self.set_status(status)
        return status

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    @property
    def results(self) -> Dict[str, PairResult]:
        return self.state.results

    def completed_images(self) -> List[AnnotatedImage]:
        return [
            result.image
            for result in self.state.results.values()
            if result.state is PairState.DONE and result.image is not None
        ]

    def export_archive(self) -> bytes:
        """ZIP archive of every completed image."""
        return build_archive(self.completed_images())

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    async def run(self) -> BatchReport:
        """Generate highlights for every uploaded pair.

        Raises:
            BatchNotReadyError: If the uploads do not allow a run.
        """
        if not self.can_generate:
            raise BatchNotReadyError(self.idle_status.name)

        start = time.perf_counter()
        self._generation += 1

        layout_dumps = list(self.layout_dumps)
        pairs = match_files(layout_dumps, self.screenshots)
        state = self._reset_state(pairs)
        self.set_status(StatusMessage.IN_PROGRESS)

        for pair in pairs:
            state.results[pair.name] = PairResult(pair.name)

        if has_title_mismatch(pairs, layout_dumps):
            log.warning(
                f"Only {len(complete_pairs(pairs))} of {len(layout_dumps)} layout dumps have a screenshot"
            )
            self.set_status(StatusMessage.TITLE_MISMATCH)
            report = BatchReport(StatusMessage.TITLE_MISMATCH)
            self.listener.batch_finished(report)
            return report

        runnable = {pair.name: pair for pair in complete_pairs(pairs)}
        tasks = [
            asyncio.create_task(self._process_pair(state, pair))
            for pair in runnable.values()
        ]
        outcomes = await asyncio.gather(*tasks)

        report = BatchReport(
            StatusMessage.FAILED if any(o.state is PairState.FAILED for o in outcomes) else StatusMessage.DONE,
            succeeded=[o.name for o in outcomes if o.state is PairState.DONE],
            failed={o.name: o.error or "" for o in outcomes if o.state is PairState.FAILED},
        )
        log.log_performance(f"batch of {len(tasks)} pairs", (time.perf_counter() - start) * 1000)

        if state.generation != self._generation:
            log.info(f"Discarding results of superseded run {state.generation}")
            return report

        self.set_status(report.status)
        if report.status is StatusMessage.DONE:
            self._schedule_status_clear()
            log.success(f"Generated {len(report.succeeded)} highlight image(s)")
        else:
            log.error(f"Highlight generation failed for: {', '.join(report.failed)}")

        self.listener.batch_finished(report)
        return report

    async def _process_pair(self, state: BatchState, pair: FilePair) -> PairResult:
        """Read, extract, render one pair; failures are captured in the result."""
        name = pair.name
        log.log_pair_event(name, "started")
        self.listener.pair_started(name)

        diagnostics: List[str] = []
        try:
            dump = await pair.layout_dump_file.read()
            boxes = extract_leaf_bounds(parse_layout_dump(dump), diagnostics)
            screenshot = await pair.screenshot_file.read()
            image = await asyncio.to_thread(render_annotated_image, name, screenshot, boxes, self.style)
        except Exception as e:
            outcome = PairResult(name, PairState.FAILED, error=str(e) or type(e).__name__, diagnostics=diagnostics)
        else:
            outcome = PairResult(name, PairState.DONE, image=image, diagnostics=diagnostics)

        if state.generation != self._generation:
            log.debug(f"Ignoring stale result for {name} from run {state.generation}")
            return outcome

        state.results[name] = outcome
        if outcome.state is PairState.DONE:
            log.log_pair_event(name, "completed", {"boxes": outcome.image.box_count})
            self.listener.pair_completed(name, outcome.image)
        else:
            log.error(f"Failed to generate highlights for {name}: {outcome.error}")
            self.listener.pair_failed(name, outcome.error)
        return outcome
