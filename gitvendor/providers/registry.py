"""Detection of the git hosting provider for a URL."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gitvendor.providers.bitbucket import BitbucketProvider
from gitvendor.providers.generic import GenericProvider
from gitvendor.providers.github import GitHubProvider
from gitvendor.providers.gitlab import GitLabProvider


@runtime_checkable
class GitHostingProvider(Protocol):
    """What a git hosting provider offers: a name, detection and URL parsing."""

    name: str

    def supports(self, url: str) -> bool:
        """Return True if this provider can handle the URL."""

    def parse_url(self, raw_url: str) -> tuple[str, str, str]:
        """Return (base URL, ref, path); ref and path are empty if absent."""


class ProviderRegistry:
    """Picks the first provider that supports a URL, else the generic one."""

    def __init__(self) -> None:
        self._providers: tuple[GitHostingProvider, ...] = (
            GitHubProvider(),
            GitLabProvider(),
            BitbucketProvider(),
        )
        self._fallback: GitHostingProvider = GenericProvider()

    def detect_provider(self, url: str) -> GitHostingProvider:
        """Return the provider responsible for the URL."""
        return next(
            (provider for provider in self._providers if provider.supports(url)),
            self._fallback,
        )

    def parse_url(self, url: str) -> tuple[str, str, str]:
        """Parse the URL with the detected provider."""
        return self.detect_provider(url).parse_url(url)