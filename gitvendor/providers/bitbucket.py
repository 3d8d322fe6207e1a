"""URL handling for bitbucket.org repositories."""

from __future__ import annotations

import re

from gitvendor.providers.github import clean_url

_DEEP_LINK = re.compile(r"(https?://)?bitbucket\.org/([^/]+)/([^/]+)/src/([^/]+)/(.+)")
_BASIC = re.compile(r"(https?://)?bitbucket\.org/([^/]+)/([^/]+)")


class BitbucketProvider:
    """Parses bitbucket.org links, including /src/ deep links."""

    name = "bitbucket"

    def supports(self, url: str) -> bool:
        """Return True if the URL points at bitbucket.org."""
        return "bitbucket.org" in clean_url(url)

    def parse_url(self, raw_url: str) -> tuple[str, str, str]:
        """Split a Bitbucket URL into (base URL, ref, path).

        Raises ValueError if the URL lacks an owner and repository.
        """
        cleaned = clean_url(raw_url)

        match = _DEEP_LINK.fullmatch(cleaned)
        if match:
            owner, repo, ref, path = match.group(2, 3, 4, 5)
            return f"https://bitbucket.org/{owner}/{repo}", ref, path

        match = _BASIC.fullmatch(cleaned)
        if match:
            owner = match.group(2)
            repo = match.group(3).removesuffix(".git")
            return f"https://bitbucket.org/{owner}/{repo}", "", ""

        raise ValueError("invalid Bitbucket URL format")