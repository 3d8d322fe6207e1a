"""Browsing of remote repositories and parsing of repository URLs."""

from __future__ import annotations

import contextlib
from typing import Any

from gitvendor.providers.registry import ProviderRegistry


class RemoteExplorer:
    """Lists remote and local directories and interprets pasted URLs."""

    def __init__(self, git_client: Any, fs: Any) -> None:
        self._git = git_client
        self._fs = fs
        self._registry = ProviderRegistry()

    def fetch_repo_dir(self, url: str, ref: str, subdir: str) -> list[str]:
        """List the entries of ``subdir`` in the remote repository at ``ref``."""
        print("⠿ Cloning repository...")

        temp_dir = self._fs.create_temp("", "git-vendor-index-*")
        try:
            self._git.clone(temp_dir, url, filter="blob:none", no_checkout=True, depth=1)

            if ref and ref != "HEAD":
                # Best effort: the ref may already be present after the clone.
                with contextlib.suppress(Exception):
                    self._git.fetch(temp_dir, 0, ref)

            return self._git.list_tree(temp_dir, ref or "HEAD", subdir)
        finally:
            with contextlib.suppress(Exception):
                self._fs.remove_all(temp_dir)

    def list_local_dir(self, path: str) -> list[str]:
        """List the entries of a local directory."""
        return self._fs.read_dir(path)

    def parse_smart_url(self, raw_url: str) -> tuple[str, str, str]:
        """Split a URL from any supported host into (base URL, ref, path)."""
        try:
            return self._registry.parse_url(raw_url)
        except ValueError:
            return raw_url, "", ""

    def get_provider_name(self, url: str) -> str:
        """Return the name of the hosting provider detected for the URL."""
        return self._registry.detect_provider(url).name