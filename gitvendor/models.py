"""Options and result records shared by the sync machinery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ParallelOptions:
    """Settings for processing vendors concurrently.

    A ``max_workers`` of 0 means one worker per CPU.
    """

    enabled: bool = False
    max_workers: int = 0


@dataclass
class SyncOptions:
    """How a sync run behaves.

    An empty ``vendor_name`` or ``group_name`` means no filtering.
    """

    dry_run: bool = False
    vendor_name: str = ""
    group_name: str = ""
    force: bool = False
    no_cache: bool = False
    parallel: ParallelOptions = field(default_factory=ParallelOptions)


@dataclass
class CopyStats:
    """Counts of files and bytes copied."""

    file_count: int = 0
    byte_count: int = 0

    def add(self, other: CopyStats) -> None:
        """Accumulate another set of stats into this one."""
        self.file_count += other.file_count
        self.byte_count += other.byte_count


@dataclass
class VendorResult:
    """Outcome of processing one vendor."""

    vendor: Any
    updated_refs: dict[str, str] | None = None
    stats: CopyStats = field(default_factory=CopyStats)
    error: BaseException | None = None