"""Fallback handling for git URLs from any host."""

from __future__ import annotations

from gitvendor.providers.github import clean_url

_KNOWN_PREFIXES = ("http://", "https://", "git://", "git@", "ssh://")


class GenericProvider:
    """Accepts any URL and only normalises it; ref and path stay empty."""

    name = "generic"

    def supports(self, url: str) -> bool:
        """Accept every URL string: this is the fallback provider."""
        return isinstance(url, str)

    def parse_url(self, raw_url: str) -> tuple[str, str, str]:
        """Normalise a git URL, returning (base URL, "", "")."""
        cleaned = clean_url(raw_url)
        if not cleaned.startswith(_KNOWN_PREFIXES):
            cleaned = "https://" + cleaned
        cleaned = cleaned.removesuffix(".git").removesuffix("/")
        return cleaned, "", ""