"""Runs independent rename jobs from a bounded thread pool."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Optional

from ..core.config import RenameJob, RenamerSettings
from ..core.errors import ConfigurationError
from ..core.models import RenameResult
from ..core.protocols import ProgressReporter
from .renamer import RenamingEngine


logger = logging.getLogger(__name__)


class BatchRunner:
    """Executes RenameJobs concurrently, one engine shared by all.

    Jobs are expected to cover disjoint trees; overlapping targets race.
    """

    def __init__(
        self,
        engine: RenamingEngine,
        workers: int = 1,
        progress: Optional[ProgressReporter] = None,
    ):
        if workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {workers}")
        self._engine = engine
        self._workers = workers
        self._progress = progress
        self.failed: dict[Path, str] = {}

    def run_targets(self, targets: Iterable[Path], settings: RenamerSettings) -> dict[Path, RenameResult]:
        """Build a job per target and run them; invalid targets are skipped."""
        jobs = []
        for target in targets:
            try:
                jobs.append(RenameJob.from_settings(Path(target), settings))
            except ConfigurationError as e:
                logger.error("Skipping %s: %s", target, e)
                self.failed[Path(target)] = str(e)
        return self.run(jobs)

    def run(self, jobs: Iterable[RenameJob]) -> dict[Path, RenameResult]:
        """Execute ``jobs``; returns target -> result for every job that ran."""
        jobs = list(jobs)
        results: dict[Path, RenameResult] = {}
        if not jobs:
            return results

        if self._progress:
            self._progress.start_phase("Renaming", len(jobs))

        with ThreadPoolExecutor(max_workers=min(self._workers, len(jobs))) as executor:
            futures = {
                executor.submit(
                    self._engine.execute,
                    job.target,
                    job.file_filter,
                    job.include_subdirectories,
                ): job
                for job in jobs
            }
            for future in as_completed(futures):
                job = futures[future]
                try:
                    results[job.target] = future.result()
                except ConfigurationError as e:
                    logger.error("Job for %s failed: %s", job.target, e)
                    self.failed[job.target] = str(e)
                if self._progress:
                    self._progress.advance_phase()

        if self._progress:
            self._progress.end_phase()
        return results
