"""Synchronisation of vendored files from their upstream repositories."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from gitvendor.models import CopyStats, SyncOptions
from gitvendor.parallel import ParallelExecutor

_STALE_MARKERS = ("reference is not a tree", "not a valid object")


class SyncError(Exception):
    """Raised when a sync cannot be completed."""


class VendorNotFoundError(SyncError):
    """Raised when a named vendor is not in the configuration."""


class GroupNotFoundError(SyncError):
    """Raised when no vendor belongs to the requested group."""


@dataclass
class HookContext:
    """Information handed to pre- and post-sync hooks."""

    vendor_name: str
    vendor_url: str
    root_dir: str
    ref: str = ""
    commit_hash: str = ""
    files_copied: int = 0


def _pluralize(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


class SyncService:
    """Fetches vendor repositories and copies their mapped paths into the project."""

    def __init__(
        self,
        config_store: Any,
        lock_store: Any,
        git_client: Any,
        fs: Any,
        file_copy: Any,
        license: Any,
        cache: Any,
        hooks: Any,
        ui: Any,
        root_dir: str,
    ) -> None:
        self._config_store = config_store
        self._lock_store = lock_store
        self._git = git_client
        self._fs = fs
        self._file_copy = file_copy
        self._license = license
        self._cache = cache
        self._hooks = hooks
        self._ui = ui
        self._root_dir = root_dir

    def sync(self, opts: SyncOptions) -> None:
        """Sync the configured vendors selected by ``opts``.

        The caller is expected to have checked that a lockfile exists.
        """
        config = self._config_store.load()
        lock = self._lock_store.load()
        lock_map = self.build_lock_map(lock)

        if opts.vendor_name:
            self.validate_vendor_exists(config, opts.vendor_name)
        if opts.group_name:
            self.validate_group_exists(config, opts.group_name)

        if opts.dry_run:
            print(self._ui.style_title("Sync Plan:"))
            print()
        else:
            self._print_sync_header(config, opts.vendor_name)

        vendors = [v for v in config.vendors if self.should_sync_vendor(v, opts)]

        if opts.dry_run:
            self._sync_dry_run(vendors, lock_map)
        elif opts.parallel.enabled:
            self._sync_parallel(vendors, lock_map, opts)
        else:
            self._sync_sequential(vendors, lock_map, opts)

    def build_lock_map(self, lock: Any) -> dict[str, dict[str, str]]:
        """Map vendor name to ref to locked commit hash; later entries win."""
        lock_map: dict[str, dict[str, str]] = {}
        for entry in lock.vendors:
            lock_map.setdefault(entry.name, {})[entry.ref] = entry.commit_hash
        return lock_map

    def validate_vendor_exists(self, config: Any, vendor_name: str) -> None:
        """Raise VendorNotFoundError unless a vendor has the given name."""
        if not any(v.name == vendor_name for v in config.vendors):
            raise VendorNotFoundError(f"vendor '{vendor_name}' not found")

    def validate_group_exists(self, config: Any, group_name: str) -> None:
        """Raise GroupNotFoundError unless some vendor belongs to the group."""
        if not any(group_name in (v.groups or ()) for v in config.vendors):
            raise GroupNotFoundError(f"group '{group_name}' not found in any vendor")

    def should_sync_vendor(self, vendor: Any, opts: SyncOptions) -> bool:
        """Return True if the vendor passes the name and group filters."""
        if opts.vendor_name and vendor.name != opts.vendor_name:
            return False
        if opts.group_name and opts.group_name not in (vendor.groups or ()):
            return False
        return True

    def preview_sync_vendor(self, vendor: Any, locked_refs: Mapping[str, str] | None) -> None:
        """Print what a sync of this vendor would do."""
        print(f"✓ {vendor.name}")
        for spec in vendor.specs:
            locked = (locked_refs or {}).get(spec.ref)
            status = f"locked: {locked[:7]}" if locked else "not synced"
            print(f"  @ {spec.ref} ({status})")

            if not spec.mapping:
                print("    (no paths configured)")
                continue
            for mapping in spec.mapping:
                print(f"    → {mapping.from_} → {mapping.to or '(auto)'}")
        print()

    def sync_vendor(
        self,
        vendor: Any,
        locked_refs: Mapping[str, str] | None,
        opts: SyncOptions,
    ) -> tuple[dict[str, str], CopyStats]:
        """Sync every ref of one vendor.

        Returns the commit hash synced for each ref and the combined copy stats.
        """
        if (
            not opts.no_cache
            and not opts.force
            and locked_refs is not None
            and all(
                self._can_skip_sync(vendor.name, spec.ref, locked_refs.get(spec.ref, ""), spec.mapping)
                for spec in vendor.specs
            )
        ):
            return self._sync_from_cache(vendor, locked_refs)

        hooks = vendor.hooks
        if hooks is not None and hooks.pre_sync:
            ctx = HookContext(vendor_name=vendor.name, vendor_url=vendor.url, root_dir=self._root_dir)
            try:
                self._hooks.execute_pre_sync(vendor, ctx)
            except Exception as exc:
                raise SyncError(f"pre-sync hook failed: {exc}") from exc

        print(f"⠿ {vendor.name} (cloning repository...)")

        temp_dir = self._fs.create_temp("", "git-vendor-*")
        try:
            try:
                self._git.init(temp_dir)
            except Exception as exc:
                raise SyncError(
                    f"failed to initialize git repository for {vendor.name}: {exc}"
                ) from exc
            try:
                self._git.add_remote(temp_dir, "origin", vendor.url)
            except Exception as exc:
                raise SyncError(
                    f"failed to add remote for {vendor.name} ({vendor.url}): {exc}\n\n"
                    "Please verify the repository URL is correct and accessible"
                ) from exc

            results: dict[str, str] = {}
            total = CopyStats()
            for spec in vendor.specs:
                commit, stats = self._sync_ref(temp_dir, vendor, spec, locked_refs, opts)
                results[spec.ref] = commit
                total.add(stats)
                print(
                    f"  ✓ {vendor.name} @ {spec.ref} (synced "
                    f"{_pluralize(len(spec.mapping), 'path', 'paths')}: "
                    f"{_pluralize(stats.file_count, 'file', 'files')})"
                )

            if hooks is not None and hooks.post_sync:
                first_ref, first_hash = next(iter(results.items()), ("", ""))
                ctx = HookContext(
                    vendor_name=vendor.name,
                    vendor_url=vendor.url,
                    root_dir=self._root_dir,
                    ref=first_ref,
                    commit_hash=first_hash,
                    files_copied=total.file_count,
                )
                self._run_post_sync(vendor, ctx)

            return results, total
        finally:
            with contextlib.suppress(Exception):
                self._fs.remove_all(temp_dir)

    def _sync_from_cache(
        self, vendor: Any, locked_refs: Mapping[str, str]
    ) -> tuple[dict[str, str], CopyStats]:
        print(f"⚡ {vendor.name} (cache hit, skipping download)")
        results: dict[str, str] = {}
        total = CopyStats()
        for spec in vendor.specs:
            results[spec.ref] = locked_refs.get(spec.ref, "")
            total.add(CopyStats(file_count=len(spec.mapping)))
            print(
                f"  ✓ {vendor.name} @ {spec.ref} "
                f"(cached: {_pluralize(len(spec.mapping), 'path', 'paths')})"
            )

        hooks = vendor.hooks
        if hooks is not None and hooks.post_sync:
            ctx = HookContext(
                vendor_name=vendor.name,
                vendor_url=vendor.url,
                root_dir=self._root_dir,
                files_copied=total.file_count,
            )
            self._run_post_sync(vendor, ctx)
        return results, total

    def _run_post_sync(self, vendor: Any, ctx: HookContext) -> None:
        try:
            self._hooks.execute_post_sync(vendor, ctx)
        except Exception as exc:
            raise SyncError(f"post-sync hook failed: {exc}") from exc

    def _sync_ref(
        self,
        temp_dir: str,
        vendor: Any,
        spec: Any,
        locked_refs: Mapping[str, str] | None,
        opts: SyncOptions,
    ) -> tuple[str, CopyStats]:
        target = (locked_refs or {}).get(spec.ref, "")

        print(f"  ⠿ Fetching ref '{spec.ref}'...")
        try:
            self._fetch_with_fallback(temp_dir, spec.ref)
        except Exception as exc:
            raise SyncError(f"failed to fetch ref {spec.ref}: {exc}") from exc

        if target:
            try:
                self._git.checkout(temp_dir, target)
            except Exception as exc:
                if any(marker in str(exc) for marker in _STALE_MARKERS):
                    raise SyncError(
                        f"locked commit {target[:7]} no longer exists in the repository.\n\n"
                        "The upstream history may have been rewritten. "
                        "Run 'git-vendor update' to fetch the latest commit and refresh the lockfile"
                    ) from exc
                raise SyncError(f"failed to checkout commit {target}: {exc}") from exc
        else:
            try:
                self._git.checkout(temp_dir, "FETCH_HEAD")
            except Exception:
                try:
                    self._git.checkout(temp_dir, spec.ref)
                except Exception as exc:
                    raise SyncError(f"failed to checkout ref {spec.ref}: {exc}") from exc

        try:
            commit = self._git.get_head_hash(temp_dir)
        except Exception as exc:
            raise SyncError(
                f"failed to get commit hash for {vendor.name} @ {spec.ref}: {exc}"
            ) from exc

        self._license.copy_license(temp_dir, vendor.name)

        print("  ⠿ Copying files...")
        stats = self._file_copy.copy_mappings(temp_dir, vendor, spec)

        if not opts.no_cache:
            try:
                self._update_cache(vendor.name, spec, commit)
            except Exception as exc:
                print(f"  ⚠ Warning: failed to update cache: {exc}")

        return commit, stats

    def _fetch_with_fallback(self, temp_dir: str, ref: str) -> None:
        try:
            self._git.fetch(temp_dir, 1, ref)
        except Exception:
            self._git.fetch_all(temp_dir)

    def _can_skip_sync(self, vendor_name: str, ref: str, commit_hash: str, mappings: Iterable[Any]) -> bool:
        try:
            cached = self._cache.load(vendor_name, ref)
        except Exception:
            return False
        if not cached.commit_hash or cached.commit_hash != commit_hash:
            return False

        checksums = {entry.path: entry.hash for entry in cached.files}
        for mapping in mappings:
            dest = mapping.to
            if not dest:
                return False
            full_path = os.path.join(self._root_dir, dest)
            if not os.path.exists(full_path):
                return False
            try:
                current = self._cache.compute_file_checksum(full_path)
            except Exception:
                return False
            if checksums.get(dest) != current:
                return False
        return True

    def _update_cache(self, vendor_name: str, spec: Any, commit_hash: str) -> None:
        dest_paths = [os.path.join(self._root_dir, m.to) for m in spec.mapping if m.to]
        built = self._cache.build_cache(vendor_name, spec.ref, commit_hash, dest_paths)
        self._cache.save(built)

    def _print_sync_header(self, config: Any, vendor_name: str) -> None:
        count = sum(1 for v in config.vendors if not vendor_name or v.name == vendor_name)
        if count > 0:
            print(f"Syncing {_pluralize(count, 'vendor', 'vendors')}...")

    def _sync_dry_run(self, vendors: list[Any], lock_map: Mapping[str, dict[str, str]]) -> None:
        progress = self._ui.start_progress(len(vendors), "Previewing sync")
        try:
            for vendor in vendors:
                self.preview_sync_vendor(vendor, lock_map.get(vendor.name))
                progress.increment(vendor.name)
        finally:
            progress.complete()

    def _sync_sequential(
        self, vendors: list[Any], lock_map: Mapping[str, dict[str, str]], opts: SyncOptions
    ) -> None:
        progress = self._ui.start_progress(len(vendors), "Syncing vendors")
        try:
            total = CopyStats()
            for vendor in vendors:
                refs = None if opts.force else lock_map.get(vendor.name)
                try:
                    _, stats = self.sync_vendor(vendor, refs, opts)
                except Exception as exc:
                    progress.fail(exc)
                    raise
                total.add(stats)
                progress.increment(f"✓ {vendor.name}")
            self._print_summary(total)
        finally:
            progress.complete()

    def _sync_parallel(
        self, vendors: list[Any], lock_map: Mapping[str, dict[str, str]], opts: SyncOptions
    ) -> None:
        progress = self._ui.start_progress(len(vendors), "Syncing vendors (parallel)")
        try:
            executor = ParallelExecutor(opts.parallel, self._ui)

            def sync_one(
                vendor: Any, locked_refs: dict[str, str] | None, sync_opts: SyncOptions
            ) -> tuple[dict[str, str], CopyStats]:
                try:
                    result = self.sync_vendor(vendor, locked_refs, sync_opts)
                except Exception as exc:
                    progress.fail(exc)
                    raise
                progress.increment(f"✓ {vendor.name}")
                return result

            results = executor.execute_parallel_sync(vendors, lock_map, opts, sync_one)
            total = CopyStats()
            for result in results:
                total.add(result.stats)
            self._print_summary(total)
        finally:
            progress.complete()

    @staticmethod
    def _print_summary(total: CopyStats) -> None:
        if total.file_count > 0:
            print()
            print(f"Summary: Synced {_pluralize(total.file_count, 'file', 'files')} across all vendors")