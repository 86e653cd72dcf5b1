"""Drives the single in-flight transcription job."""

import threading
import uuid
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from sheet_gen.config import JobConfig
from sheet_gen.domain.models import (
    ErrorInfo,
    JobStatus,
    MediaDescriptor,
    SourceKind,
    TranscriptionJob,
    TranscriptionResponse,
)
from sheet_gen.domain.phases import (
    DONE_MESSAGE,
    FAILED_MESSAGE,
    LINK_PHASES,
    UPLOAD_PHASES,
    UPLOADING_MESSAGE,
    Phase,
)
from sheet_gen.exceptions import (
    EmptyResultError,
    NetworkError,
    TransportError,
    ValidationError,
)
from sheet_gen.infrastructure.interfaces import TranscriptionTransport
from sheet_gen.logging import setup_logging

from .progress_estimator import ProgressEstimator

logger = setup_logging()

JobListener = Callable[[TranscriptionJob], None]
EstimatorFactory = Callable[..., ProgressEstimator]


class TranscriptionOrchestrator:
    """
    Owns the live TranscriptionJob and its progress narration.

    submit() validates synchronously and runs the remote call on a worker
    thread. Listeners receive a snapshot of the current job after every change,
    delivered while the job lock is held so they observe changes in order.
    A newer submission supersedes the current job without cancelling its
    remote call; the superseded call still completes into its own job, which
    its Future returns, but it no longer drives the current job or listeners.
    """

    def __init__(
        self,
        transport: TranscriptionTransport,
        config: JobConfig,
        executor: Executor | None = None,
        estimator_factory: EstimatorFactory = ProgressEstimator,
    ):
        self._transport = transport
        self._config = config
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.worker_threads, thread_name_prefix="transcription"
        )
        self._estimator_factory = estimator_factory
        self._lock = threading.RLock()
        self._job = TranscriptionJob()
        self._estimator: ProgressEstimator | None = None
        self._listeners: list[JobListener] = []

    @property
    def job(self) -> TranscriptionJob:
        """Snapshot of the current job."""
        with self._lock:
            return self._job.model_copy()

    @property
    def estimator(self) -> ProgressEstimator | None:
        """The estimator currently narrating, if any."""
        with self._lock:
            if self._estimator is not None and self._estimator.is_active:
                return self._estimator
            return None

    def add_listener(self, listener: JobListener) -> None:
        self._listeners.append(listener)

    def submit(self, source: MediaDescriptor) -> Future:
        """
        Starts a new transcription job for a media source.

        Args:
            source: Descriptor of the link or local file.

        Returns:
            Future resolving to the final snapshot of this submission's job.

        Raises:
            ValidationError: If the source is rejected before any network call.
        """
        self._validate(source)

        with self._lock:
            self._stop_estimator()
            job = TranscriptionJob(
                job_id=uuid.uuid4().hex, source_kind=source.source_kind
            )
            self._job = job

            if source.source_kind is SourceKind.URL:
                job.status = JobStatus.PROCESSING
                self._start_estimator(job, LINK_PHASES)
            else:
                job.status = JobStatus.UPLOADING
                job.phase_message = UPLOADING_MESSAGE
            self._notify(job.model_copy())

        logger.info(
            "Transcription job submitted",
            extra={
                "job_id": job.job_id,
                "source_kind": source.source_kind.value,
                "source_name": source.name,
            },
        )
        return self._executor.submit(self._run, job, source)

    def shutdown(self) -> None:
        """Stops narration and releases the worker threads."""
        with self._lock:
            self._stop_estimator()
        self._executor.shutdown(wait=False)

    def _validate(self, source: MediaDescriptor) -> None:
        if source.source_kind is SourceKind.URL and not source.uri.strip():
            logger.warning("Submission rejected", extra={"reason": ValidationError.EMPTY_URL})
            raise ValidationError(ValidationError.EMPTY_URL)
        if (
            source.source_kind is SourceKind.LOCAL_FILE
            and source.size > self._config.max_upload_bytes
        ):
            logger.warning(
                "Submission rejected",
                extra={"reason": ValidationError.FILE_TOO_LARGE, "size": source.size},
            )
            raise ValidationError(ValidationError.FILE_TOO_LARGE)

    def _run(self, job: TranscriptionJob, source: MediaDescriptor) -> TranscriptionJob:
        try:
            if source.source_kind is SourceKind.URL:
                response = self._transport.transcribe_link(source.uri.strip())
            else:
                response = self._transport.transcribe_upload(
                    source, lambda percent: self._on_upload_progress(job, percent)
                )
        except TransportError as e:
            self._fail(job, e, getattr(e, "detail", None))
        except EmptyResultError as e:
            self._fail(job, e)
        except Exception as e:
            logger.exception("Unexpected transcription failure", extra={"job_id": job.job_id})
            self._fail(job, NetworkError(e))
        else:
            self._complete(job, response)

        with self._lock:
            return job.model_copy()

    def _on_upload_progress(self, job: TranscriptionJob, percent: int) -> None:
        with self._lock:
            if job.status is not JobStatus.UPLOADING:
                return
            percent = max(0, min(100, int(percent)))
            if percent < job.progress:
                return
            job.progress = percent
            if percent == 100:
                job.status = JobStatus.PROCESSING
                if job is self._job:
                    self._start_estimator(job, UPLOAD_PHASES)
            if job is self._job:
                self._notify(job.model_copy())

    def _on_phase(self, job: TranscriptionJob, message: str) -> None:
        with self._lock:
            if job is not self._job or job.status is not JobStatus.PROCESSING:
                return
            job.phase_message = message
            self._notify(job.model_copy())

    def _complete(self, job: TranscriptionJob, response: TranscriptionResponse) -> None:
        with self._lock:
            if job.is_terminal:
                return
            if response.metadata is not None:
                job.recognized_metadata = response.metadata

            if response.musicxml and response.musicxml.strip():
                job.result = response.musicxml
                job.status = JobStatus.DONE
                job.phase_message = DONE_MESSAGE
            else:
                error = EmptyResultError()
                job.error = ErrorInfo(kind=error.kind, message=str(error))
                job.status = JobStatus.FAILED
                job.phase_message = FAILED_MESSAGE
            snapshot, is_current = self._finish(job)

        logger.info(
            "Transcription job finished",
            extra={
                "job_id": job.job_id,
                "status": snapshot.status.value,
                "recognized": response.recognized,
                "superseded": not is_current,
            },
        )

    def _fail(self, job: TranscriptionJob, error: Exception, detail: str | None = None) -> None:
        with self._lock:
            if job.is_terminal:
                return
            job.error = ErrorInfo(
                kind=getattr(error, "kind", "network"), message=str(error), detail=detail
            )
            job.status = JobStatus.FAILED
            job.phase_message = FAILED_MESSAGE
            snapshot, is_current = self._finish(job)

        logger.error(
            "Transcription job failed",
            extra={
                "job_id": job.job_id,
                "error_kind": snapshot.error.kind,
                "error": snapshot.error.message,
                "superseded": not is_current,
            },
        )

    def _finish(self, job: TranscriptionJob) -> tuple[TranscriptionJob, bool]:
        """Settles a terminal job; the caller holds the lock."""
        snapshot = job.model_copy()
        is_current = job is self._job
        if is_current:
            self._stop_estimator()
            self._notify(snapshot)
        return snapshot, is_current

    def _start_estimator(self, job: TranscriptionJob, phases: Sequence[Phase]) -> None:
        self._stop_estimator()
        self._estimator = self._estimator_factory(
            phases,
            on_phase=lambda message: self._on_phase(job, message),
            tick_seconds=self._config.phase_tick_seconds,
        )
        self._estimator.start()

    def _stop_estimator(self) -> None:
        if self._estimator is not None:
            self._estimator.stop()
            self._estimator = None

    def _notify(self, snapshot: TranscriptionJob) -> None:
        # Runs under self._lock.
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Job listener failed", extra={"job_id": snapshot.job_id})
