"""URL handling for GitHub and GitHub Enterprise repositories."""

from __future__ import annotations

import re

_DEEP_LINK = re.compile(r"(github\.com/[^/]+/[^/]+)/(blob|tree)/([^/]+)/(.+)")


def clean_url(raw: str) -> str:
    """Trim surrounding whitespace, then any leading backslashes."""
    return raw.strip().lstrip("\\")


class GitHubProvider:
    """Parses github.com links, including blob and tree deep links."""

    name = "github"

    def supports(self, url: str) -> bool:
        """Return True if the URL points at github.com."""
        return "github.com" in clean_url(url)

    def parse_url(self, raw_url: str) -> tuple[str, str, str]:
        """Split a GitHub URL into (base URL, ref, path)."""
        cleaned = clean_url(raw_url)

        match = _DEEP_LINK.search(cleaned)
        if match:
            return "https://" + match.group(1), match.group(3), match.group(4)

        base = cleaned.removesuffix("/").removesuffix(".git")
        if not base.startswith(("http://", "https://")):
            base = "https://" + base
        return base, "", ""