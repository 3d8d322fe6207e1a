"""Comparison of locked commits with the latest commits upstream."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Any


class UpdateCheckError(Exception):
    """Raised when update checking cannot proceed."""


@dataclass
class UpdateCheckResult:
    """Whether one vendor ref is behind its upstream."""

    vendor_name: str
    ref: str
    current_hash: str
    latest_hash: str
    last_updated: str
    up_to_date: bool


class UpdateChecker:
    """Checks every locked vendor ref against the remote."""

    def __init__(self, config_store: Any, lock_store: Any, git_client: Any, fs: Any, ui: Any) -> None:
        self._config_store = config_store
        self._lock_store = lock_store
        self._git = git_client
        self._fs = fs
        self._ui = ui

    def check_updates(self) -> list[UpdateCheckResult]:
        """Return one result per configured ref that has a lock entry.

        Refs whose remote cannot be reached are skipped with a warning.
        """
        try:
            config = self._config_store.load()
        except Exception as exc:
            raise UpdateCheckError(f"failed to load config: {exc}") from exc

        try:
            lock = self._lock_store.load()
        except Exception as exc:
            raise UpdateCheckError(f"failed to load lockfile: {exc}") from exc

        lock_map: dict[str, dict[str, Any]] = {}
        for entry in lock.vendors:
            lock_map.setdefault(entry.name, {})[entry.ref] = entry

        results: list[UpdateCheckResult] = []
        for vendor in config.vendors:
            locked = lock_map.get(vendor.name, {})
            for spec in vendor.specs:
                entry = locked.get(spec.ref)
                if entry is None:
                    continue

                try:
                    latest = self._fetch_latest_hash(vendor.url, spec.ref)
                except Exception as exc:
                    self._ui.show_warning(
                        "Fetch Failed",
                        f"Could not check updates for {vendor.name} @ {spec.ref}: {exc}",
                    )
                    continue

                results.append(
                    UpdateCheckResult(
                        vendor_name=vendor.name,
                        ref=spec.ref,
                        current_hash=entry.commit_hash,
                        latest_hash=latest,
                        last_updated=entry.updated,
                        up_to_date=latest == entry.commit_hash,
                    )
                )
        return results

    def _fetch_latest_hash(self, url: str, ref: str) -> str:
        try:
            temp_dir = self._fs.create_temp("", "update-check-*")
        except Exception as exc:
            raise UpdateCheckError(f"failed to create temp dir: {exc}") from exc

        try:
            steps = (
                ("git init failed", lambda: self._git.init(temp_dir)),
                ("git remote add failed", lambda: self._git.add_remote(temp_dir, "origin", url)),
                ("git fetch failed", lambda: self._git.fetch(temp_dir, 1, ref)),
            )
            for message, step in steps:
                try:
                    step()
                except Exception as exc:
                    raise UpdateCheckError(f"{message}: {exc}") from exc

            try:
                return self._git.get_head_hash(temp_dir)
            except Exception as exc:
                raise UpdateCheckError(f"failed to get commit hash: {exc}") from exc
        finally:
            with contextlib.suppress(Exception):
                self._fs.remove_all(temp_dir)