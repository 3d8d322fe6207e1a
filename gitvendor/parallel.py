"""Concurrent processing of vendors with a bounded worker pool."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from gitvendor.models import CopyStats, ParallelOptions, SyncOptions, VendorResult

_WORKER_CAP = 8

SyncVendorFunc = Callable[[Any, "dict[str, str] | None", SyncOptions], "tuple[dict[str, str] | None, CopyStats]"]
UpdateVendorFunc = Callable[[Any, SyncOptions], "dict[str, str] | None"]


class ParallelExecutionError(Exception):
    """Raised when at least one vendor failed; carries every result."""

    def __init__(self, vendor_name: str, cause: BaseException, results: list[VendorResult]) -> None:
        super().__init__(f"{vendor_name}: {cause}")
        self.vendor_name = vendor_name
        self.cause = cause
        self.results = results
        self.__cause__ = cause


class ParallelExecutor:
    """Runs per-vendor work on a pool of at most eight threads."""

    def __init__(self, opts: ParallelOptions, ui: Any) -> None:
        workers = opts.max_workers
        if workers == 0:
            workers = os.cpu_count() or 1
        self.max_workers = min(workers, _WORKER_CAP)
        self.ui = ui

    def execute_parallel_sync(
        self,
        vendors: Iterable[Any],
        lock_map: Mapping[str, dict[str, str]] | None,
        opts: SyncOptions,
        sync_func: SyncVendorFunc,
    ) -> list[VendorResult]:
        """Sync every vendor concurrently.

        Results are in completion order. Raises ParallelExecutionError
        naming the first failure once all vendors have been processed.
        """

        def job(vendor: Any) -> VendorResult:
            locked_refs = lock_map.get(vendor.name) if lock_map else None
            if opts.force:
                locked_refs = None
            try:
                updated_refs, stats = sync_func(vendor, locked_refs, opts)
            except Exception as exc:
                return VendorResult(vendor=vendor, error=exc)
            return VendorResult(vendor=vendor, updated_refs=updated_refs, stats=stats)

        return self._run(vendors, job)

    def execute_parallel_update(
        self,
        vendors: Iterable[Any],
        update_func: UpdateVendorFunc,
    ) -> list[VendorResult]:
        """Update every vendor concurrently, always forcing and bypassing the cache."""

        def job(vendor: Any) -> VendorResult:
            try:
                updated_refs = update_func(vendor, SyncOptions(force=True, no_cache=True))
            except Exception as exc:
                return VendorResult(vendor=vendor, error=exc)
            return VendorResult(vendor=vendor, updated_refs=updated_refs)

        return self._run(vendors, job)

    def _run(self, vendors: Iterable[Any], job: Callable[[Any], VendorResult]) -> list[VendorResult]:
        pending = list(vendors)
        if not pending:
            return []
        worker_count = min(self.max_workers, len(pending))
        if worker_count < 1:
            return []

        with ThreadPoolExecutor(max_workers=worker_count) as pool:
            futures = [pool.submit(job, vendor) for vendor in pending]
            results = [future.result() for future in as_completed(futures)]

        failed = next((result for result in results if result.error is not None), None)
        if failed is not None:
            raise ParallelExecutionError(failed.vendor.name, failed.error, results)
        return results