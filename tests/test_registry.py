import pytest

from gitvendor.providers.registry import ProviderRegistry


@pytest.fixture
def registry():
    return ProviderRegistry()


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://github.com/owner/repo", "github"),
        ("https://github.com/owner/repo/blob/main/file.go", "github"),
        ("https://gitlab.com/owner/repo", "gitlab"),
        ("https://gitlab.com/owner/repo/-/blob/main/file.go", "gitlab"),
        ("https://git.example.com/owner/repo/-/blob/main/file.go", "gitlab"),
        ("https://bitbucket.org/owner/repo", "bitbucket"),
        ("https://bitbucket.org/owner/repo/src/main/file.py", "bitbucket"),
        ("https://git.company.com/project/repo", "generic"),
        ("git://git.kernel.org/pub/scm/git/git.git", "generic"),
        ("git@example.com:owner/repo.git", "generic"),
    ],
)
def test_detect_provider(registry, url, expected):
    assert registry.detect_provider(url).name == expected


@pytest.mark.parametrize(
    "url, base, ref, path",
    [
        (
            "https://github.com/owner/repo/blob/main/src/file.go",
            "https://github.com/owner/repo",
            "main",
            "src/file.go",
        ),
        (
            "https://gitlab.com/owner/repo/-/blob/main/src/file.go",
            "https://gitlab.com/owner/repo",
            "main",
            "src/file.go",
        ),
        (
            "https://bitbucket.org/owner/repo/src/main/file.py",
            "https://bitbucket.org/owner/repo",
            "main",
            "file.py",
        ),
        (
            "https://git.example.com/project/repo",
            "https://git.example.com/project/repo",
            "",
            "",
        ),
    ],
)
def test_parse_url(registry, url, base, ref, path):
    assert registry.parse_url(url) == (base, ref, path)


def test_parse_url_propagates_provider_error(registry):
    with pytest.raises(ValueError, match="invalid Bitbucket URL format"):
        registry.parse_url("https://bitbucket.org/owner")


def test_github_takes_precedence_over_gitlab_style_path(registry):
    assert registry.detect_provider("https://github.com/o/r/-/blob/main/x").name == "github"