"""
folio Transfer Orchestrator

Single-flight state machine for handing the generated document to an
injected async transfer function.

    IDLE ──execute──> RUNNING ──ok──────> SUCCEEDED ──3000 ms──> IDLE
                         │
                         └──error/timeout─> FAILED ──5000 ms──> IDLE

- Re-entrant execute calls while RUNNING are rejected, never queued.
- Every state entry cancels any pending auto-reset and bumps a generation
  counter; a scheduled reset only applies to the generation that scheduled
  it, so the latest transition always wins.
- reset() forces IDLE from any state. An attempt still in flight when
  reset() runs finishes silently: its outcome is not recorded.
- Exceptions from the transfer function are converted to a message and
  exposed through the FAILED state; they are never re-raised.
- A result of exactly False, or a mapping or object whose success flag
  (success, operation_success, operationSuccess) is exactly False, is a
  rejection: FAILED with the result's error or message text.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union
import asyncio
import inspect
import json
import logging
import time

from folio.core.enums import TransferState
from folio.core.records import Paragraph, Container, utc_now
from folio.adapters.sources import RecordSource
from folio.queries.containers import ContainerStats, RecordQueries
from folio.content.generator import generate_content
from folio.validation.engine import ValidationReport, validate
from folio.errors.taxonomy import (
    BridgeIssue,
    IssueCode,
    TransferRejectedError,
    TransferTimeoutError,
    create_transfer_issue,
)
from folio.transfer.failures import describe_failure, rejection_reason
from folio.transfer.metrics import TransferMetrics
from folio.bootstrap.config import BridgeConfig

logger = logging.getLogger(__name__)


# =============================================================================
# TYPES
# =============================================================================

@dataclass
class TransferPayload:
    """What the transfer function receives: the document plus its structure."""
    content: str
    container_count: int
    paragraph_count: int
    assigned_paragraph_count: int
    paragraphs_with_content: int
    total_content_length: int
    container_stats: Dict[str, ContainerStats] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "container_count": self.container_count,
            "paragraph_count": self.paragraph_count,
            "assigned_paragraph_count": self.assigned_paragraph_count,
            "paragraphs_with_content": self.paragraphs_with_content,
            "total_content_length": self.total_content_length,
            "container_stats": {k: v.to_dict() for k, v in self.container_stats.items()},
            "created_at": self.created_at.isoformat(),
        }


TransferFunction = Callable[[TransferPayload], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class TransferStatus:
    """Point-in-time view of the orchestrator."""
    state: TransferState
    can_transfer: bool
    last_error: Optional[str]
    last_result: Any
    metrics: TransferMetrics

    @property
    def is_running(self) -> bool:
        return self.state == TransferState.RUNNING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "can_transfer": self.can_transfer,
            "last_error": self.last_error,
            "metrics": self.metrics.to_dict(),
        }


LEGAL_TRANSITIONS: Dict[TransferState, List[TransferState]] = {
    TransferState.IDLE: [TransferState.RUNNING],
    TransferState.RUNNING: [TransferState.SUCCEEDED, TransferState.FAILED],
    TransferState.SUCCEEDED: [TransferState.RUNNING, TransferState.IDLE],
    TransferState.FAILED: [TransferState.RUNNING, TransferState.IDLE],
}


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class TransferOrchestrator:
    """
    Coordinates one outbound transfer at a time.

    Usage:
        orchestrator = TransferOrchestrator(StoreSource(store), send_to_form)

        if orchestrator.can_transfer():
            await orchestrator.execute_transfer()

        orchestrator.status.metrics.successes
    """

    def __init__(
        self,
        source: RecordSource,
        transfer_fn: TransferFunction,
        config: Optional[BridgeConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            source: Where containers and paragraphs are read from
            transfer_fn: Async callable receiving a TransferPayload
            config: Timing and debug settings (defaults when omitted)
            clock: Monotonic seconds, used for refresh debouncing
        """
        self._queries = RecordQueries(source)
        self._transfer_fn = transfer_fn
        self._config = config or BridgeConfig()
        self._clock = clock or time.monotonic

        self._state = TransferState.IDLE
        self._generation = 0
        self._reset_handle: Optional[asyncio.TimerHandle] = None

        self._last_error: Optional[str] = None
        self._last_issue: Optional[BridgeIssue] = None
        self._last_result: Any = None
        self._metrics = TransferMetrics()

        self._last_refresh_at: Optional[float] = None
        self._last_report: Optional[ValidationReport] = None

        self._diagnostic("created", config=self._config.to_dict())

    # ==================== Properties ====================

    @property
    def state(self) -> TransferState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == TransferState.RUNNING

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def queries(self) -> RecordQueries:
        return self._queries

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def last_issue(self) -> Optional[BridgeIssue]:
        return self._last_issue

    @property
    def last_result(self) -> Any:
        return self._last_result

    @property
    def last_report(self) -> Optional[ValidationReport]:
        """Report from the last accepted refresh_validation() call."""
        return self._last_report

    @property
    def metrics(self) -> TransferMetrics:
        return self._metrics.snapshot()

    @property
    def status(self) -> TransferStatus:
        return TransferStatus(
            state=self._state,
            can_transfer=self.can_transfer(),
            last_error=self._last_error,
            last_result=self._last_result,
            metrics=self._metrics.snapshot(),
        )

    # ==================== Capability & validation ====================

    def _read_records(self) -> Tuple[List[Container], List[Paragraph]]:
        source = self._queries.source
        try:
            return source.get_containers(), source.get_paragraphs()
        except Exception as e:
            logger.error(f"Record source failed: {e}")
            return [], []

    def can_transfer(self) -> bool:
        """
        Whether a transfer could start now.

        Side-effect free: False while RUNNING, otherwise the readiness of the
        current record set.
        """
        if self._state == TransferState.RUNNING:
            return False
        containers, paragraphs = self._read_records()
        return validate(containers, paragraphs, transfer_capable=True).is_ready

    def validation_status(self) -> ValidationReport:
        """Validation report for the current records, gated on not RUNNING."""
        containers, paragraphs = self._read_records()
        return validate(
            containers,
            paragraphs,
            transfer_capable=self._state != TransferState.RUNNING,
        )

    def refresh_validation(self) -> Optional[ValidationReport]:
        """
        Recompute the validation report, at most once per debounce window.

        Returns:
            The fresh report, or None when the call was dropped
        """
        now = self._clock()
        window_ms = self._config.refresh_debounce_ms
        if self._last_refresh_at is not None and (now - self._last_refresh_at) * 1000 < window_ms:
            logger.debug(f"Validation refresh dropped (within {window_ms} ms of previous)")
            return None

        self._last_refresh_at = now
        self._last_report = self.validation_status()
        self._diagnostic(
            "validation_refreshed",
            errors=len(self._last_report.errors),
            warnings=len(self._last_report.warnings),
            is_ready=self._last_report.is_ready,
        )
        return self._last_report

    # ==================== Transfer ====================

    async def execute_transfer(self) -> bool:
        """
        Run one transfer.

        Returns:
            True if the transfer succeeded; False if it was rejected up front
            (already running, or the records are not ready) or failed.
        """
        if self._state == TransferState.RUNNING:
            logger.warning("Transfer already running, rejecting re-entrant call")
            self._diagnostic("rejected", reason="running")
            return False

        containers, paragraphs = self._read_records()
        report = validate(containers, paragraphs, transfer_capable=True)
        if not report.is_ready:
            logger.warning(f"Transfer blocked by validation: {report.errors}")
            self._diagnostic("rejected", reason="validation", errors=report.errors)
            return False

        generation = self._enter(TransferState.RUNNING)
        self._last_error = None
        self._last_issue = None
        self._last_result = None

        attempted_at = utc_now()
        started = time.perf_counter()
        logger.info(
            f"Transfer started: {report.container_count} containers, "
            f"{report.paragraph_count} paragraphs"
        )

        try:
            payload = self._build_payload(containers, paragraphs, report)
            result = await self._call_transfer(payload)
            rejected = rejection_reason(result)
            if rejected is not None:
                raise TransferRejectedError(rejected)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._fail(
                    "Transfer was cancelled",
                    IssueCode.TRANSFER_FAILED,
                    self._elapsed_ms(started),
                    attempted_at,
                )
            raise
        except TransferTimeoutError as e:
            return self._finish_failure(generation, str(e), IssueCode.TRANSFER_TIMEOUT, started, attempted_at)
        except TransferRejectedError as e:
            return self._finish_failure(generation, str(e), IssueCode.TRANSFER_REJECTED, started, attempted_at)
        except Exception as e:
            return self._finish_failure(generation, describe_failure(e), IssueCode.TRANSFER_FAILED, started, attempted_at)

        if generation != self._generation:
            logger.info("Transfer finished after a reset, discarding result")
            return False

        duration_ms = self._elapsed_ms(started)
        self._metrics.record(True, duration_ms, attempted_at)
        self._last_result = result
        self._enter(TransferState.SUCCEEDED)
        self._schedule_reset(self._config.success_reset_ms)

        logger.info(f"Transfer succeeded in {duration_ms:.1f} ms")
        self._diagnostic("succeeded", duration_ms=duration_ms, metrics=self._metrics.to_dict())
        return True

    async def _call_transfer(self, payload: TransferPayload) -> Any:
        outcome = self._transfer_fn(payload)
        if not inspect.isawaitable(outcome):
            return outcome

        timeout_ms = self._config.transfer_timeout_ms
        try:
            return await asyncio.wait_for(outcome, timeout=timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise TransferTimeoutError(timeout_ms)

    def _build_payload(
        self,
        containers: List[Container],
        paragraphs: List[Paragraph],
        report: ValidationReport,
    ) -> TransferPayload:
        return TransferPayload(
            content=generate_content(containers, paragraphs),
            container_count=report.container_count,
            paragraph_count=report.paragraph_count,
            assigned_paragraph_count=report.assigned_paragraph_count,
            paragraphs_with_content=self._queries.total_with_content(paragraphs),
            total_content_length=report.total_content_length,
            container_stats=self._queries.container_stats(containers, paragraphs),
        )

    def _finish_failure(
        self,
        generation: int,
        message: str,
        code: IssueCode,
        started: float,
        attempted_at: datetime,
    ) -> bool:
        if generation != self._generation:
            logger.info(f"Transfer failed after a reset, discarding error: {message}")
            return False
        self._fail(message, code, self._elapsed_ms(started), attempted_at)
        return False

    def _fail(self, message: str, code: IssueCode, duration_ms: float, attempted_at: datetime) -> None:
        self._metrics.record(False, duration_ms, attempted_at)
        self._last_error = message
        self._last_issue = create_transfer_issue(message, code)
        self._enter(TransferState.FAILED)
        self._schedule_reset(self._config.failure_reset_ms)

        logger.warning(f"Transfer failed: {message}")
        self._diagnostic("failed", code=code.name, message=message, metrics=self._metrics.to_dict())

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return (time.perf_counter() - started) * 1000

    # ==================== Reset ====================

    def reset(self) -> None:
        """
        Force IDLE and clear everything.

        Cancels any pending auto-reset, clears result, error and metrics, and
        restarts the refresh debounce window. Idempotent.
        """
        self._enter(TransferState.IDLE, forced=True)
        self._last_error = None
        self._last_issue = None
        self._last_result = None
        self._metrics = TransferMetrics()
        self._last_refresh_at = None
        self._last_report = None
        logger.debug("Transfer orchestrator reset")

    # ==================== State machine internals ====================

    def _enter(self, state: TransferState, forced: bool = False) -> int:
        """Enter a state, cancelling any pending auto-reset. Returns the new generation."""
        previous = self._state
        if not forced and state not in LEGAL_TRANSITIONS.get(previous, []):
            logger.error(f"Illegal transfer transition {previous.value} -> {state.value}")

        self._cancel_pending_reset()
        self._generation += 1
        self._state = state

        if previous != state:
            logger.debug(f"Transfer state {previous.value} -> {state.value} (generation {self._generation})")
        return self._generation

    def _cancel_pending_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def _schedule_reset(self, delay_ms: int) -> None:
        generation = self._generation
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(delay_ms / 1000, self._auto_reset, generation)

    def _auto_reset(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug(f"Ignoring stale auto-reset for generation {generation}")
            return
        self._reset_handle = None
        self._enter(TransferState.IDLE)
        self._last_error = None
        self._last_issue = None
        self._last_result = None
        self._diagnostic("auto_reset")

    # ==================== Diagnostics ====================

    def _diagnostic(self, event: str, **fields: Any) -> None:
        if not self._config.debug_mode:
            return
        record = {"event": event, "state": self._state.value, **fields}
        logger.debug(f"transfer.diagnostic {json.dumps(record, default=str)}")
