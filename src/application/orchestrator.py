"""Main orchestrator for the archive job pipeline."""

from typing import Optional

from domain.models import JobDescriptor, JobResult, PipelineState, ResultPayload
from domain.protocols import (
    IScratchSpace, IHeaderValidator, IDownloader, IArchiver, ISizeReporter,
    IUploader, INotifier, ILogger, IMetricsCollector
)

SUCCESS = 'success'


class ArchiveJobOrchestrator:
    """
    Main orchestrator - runs the stages of one job strictly in order.

    scratch -> (validate) -> download -> archive -> size -> upload -> notify

    Any stage before notification that raises aborts the rest of the run.
    Notification failures are absorbed by the notifier.
    """

    def __init__(
        self,
        scratch: IScratchSpace,
        downloader: IDownloader,
        archiver: IArchiver,
        size_reporter: ISizeReporter,
        uploader: IUploader,
        notifier: INotifier,
        logger: ILogger,
        metrics: IMetricsCollector,
        validator: Optional[IHeaderValidator] = None,
        cleanup_scratch: bool = False
    ):
        self._scratch = scratch
        self._downloader = downloader
        self._archiver = archiver
        self._size_reporter = size_reporter
        self._uploader = uploader
        self._notifier = notifier
        self._logger = logger
        self._metrics = metrics
        self._validator = validator
        self._cleanup_scratch = cleanup_scratch

    def process(self, job: JobDescriptor, invocation_id: Optional[str] = None) -> JobResult:
        """Execute an archive job."""
        self._logger.info(
            f"Started processing job {job.job_id or '<no id>'}: "
            f"{len(job.sources)} files -> {job.destination.full_key}"
        )
        self._metrics.start_timer('total_job')
        state = PipelineState()

        try:
            # 1. Scratch space
            self._metrics.start_timer('scratch')
            state.scratch_dir = self._scratch.create(invocation_id)
            self._metrics.stop_timer('scratch')

            # 2. Optional pre-flight size accounting
            if self._validator is not None:
                self._metrics.start_timer('validate')
                state.expected_source_bytes = self._validator.validate(job.sources)
                self._metrics.stop_timer('validate')

            # 3. Download
            self._metrics.start_timer('download')
            self._downloader.download_all(job.sources, state.scratch_dir, state.source_bytes)
            self._metrics.stop_timer('download')
            self._metrics.increment_counter('files_downloaded', len(job.sources))
            self._metrics.increment_counter('bytes_downloaded', state.total_source_bytes)

            if (state.expected_source_bytes is not None
                    and state.expected_source_bytes != state.total_source_bytes):
                self._logger.warning(
                    f"Downloaded {state.total_source_bytes} bytes but headers "
                    f"reported {state.expected_source_bytes}"
                )

            # 4. Archive
            self._metrics.start_timer('archive')
            state.archive_path = self._archiver.archive(state.scratch_dir, job.destination.name)
            self._metrics.stop_timer('archive')

            # 5. Size
            state.archive_size = self._size_reporter.report(
                state.archive_path, state.total_source_bytes
            )
            self._metrics.record_metric('archive_bytes', state.archive_size)

            # 6. Upload
            self._metrics.start_timer('upload')
            upload_result = self._uploader.upload(
                state.archive_path, job.destination, job.acl, job.storage_class
            )
            self._metrics.stop_timer('upload')
            state.location = upload_result.url

        except Exception as e:
            self._logger.exception(f"Job processing failed: {e}")
            self._release_scratch(state)
            total_time = self._metrics.stop_timer('total_job')
            self._logger.info(f"Job completed in {total_time:.2f}s")
            self._metrics.log_summary(self._logger)

            return JobResult(
                success=False,
                job_id=job.job_id,
                archive_path=state.archive_path,
                duration_seconds=total_time,
                metrics=self._metrics.get_summary(),
                errors=[f"{type(e).__name__}: {e}"]
            )

        # 7. Notify
        results = ResultPayload(status=SUCCESS, location=state.location, size=state.archive_size)
        self._metrics.start_timer('notify')
        report = self._notifier.notify(job, results)
        self._metrics.stop_timer('notify')
        self._metrics.increment_counter('notifications_sent', report.sent)
        self._metrics.increment_counter('notifications_failed', report.failed)
        self._metrics.increment_counter('notifications_skipped', report.skipped)

        self._release_scratch(state)

        total_time = self._metrics.stop_timer('total_job')
        self._logger.info(f"Job completed in {total_time:.2f}s")
        self._metrics.log_summary(self._logger)

        result = JobResult(
            success=True,
            job_id=job.job_id,
            archive_path=state.archive_path,
            location=state.location,
            size_bytes=state.archive_size,
            duration_seconds=total_time,
            metrics=self._metrics.get_summary()
        )
        result.add_metric('total_source_bytes', state.total_source_bytes)
        return result

    def _release_scratch(self, state: PipelineState) -> None:
        """Remove the scratch directory this run created, when configured to."""
        if self._cleanup_scratch and state.scratch_dir is not None:
            self._scratch.cleanup(state.scratch_dir)
