"""URL handling for gitlab.com and self-hosted GitLab instances."""

from __future__ import annotations

import re

from gitvendor.providers.github import clean_url

_DEEP_LINK = re.compile(r"(https?://)?([^/]+)/(.+?)/-/(blob|tree)/([^/]+)/(.+)")
_BASIC = re.compile(r"(https?://)?(.+)")


class GitLabProvider:
    """Parses GitLab links, including nested groups and /-/blob/ deep links."""

    name = "gitlab"

    def supports(self, url: str) -> bool:
        """Return True for gitlab.com URLs or URLs with GitLab's /-/ link style."""
        cleaned = clean_url(url)
        return (
            "gitlab.com" in cleaned
            or "/-/blob/" in cleaned
            or "/-/tree/" in cleaned
        )

    def parse_url(self, raw_url: str) -> tuple[str, str, str]:
        """Split a GitLab URL into (base URL, ref, path).

        Raises ValueError if the URL is empty.
        """
        cleaned = clean_url(raw_url)

        match = _DEEP_LINK.fullmatch(cleaned)
        if match:
            protocol = match.group(1) or "https://"
            host, project_path = match.group(2), match.group(3)
            return protocol + host + "/" + project_path, match.group(5), match.group(6)

        match = _BASIC.fullmatch(cleaned)
        if match:
            protocol = match.group(1) or "https://"
            remaining = match.group(2).removesuffix("/").removesuffix(".git")
            return protocol + remaining, "", ""

        raise ValueError("invalid GitLab URL format")