import pytest

from gitvendor.remote import RemoteExplorer

TEMP = "/tmp/test-12345"
REPO = "https://github.com/owner/repo"


class FakeFS:
    def __init__(self, entries=None):
        self.entries = entries or []
        self.created = []
        self.removed = []
        self.read = []

    def create_temp(self, directory, pattern):
        self.created.append((directory, pattern))
        return TEMP

    def remove_all(self, path):
        self.removed.append(path)

    def read_dir(self, path):
        self.read.append(path)
        return list(self.entries)


class FakeGit:
    def __init__(self, tree=None, clone_error=None, fetch_error=None, tree_error=None):
        self.tree = tree or []
        self.clone_error = clone_error
        self.fetch_error = fetch_error
        self.tree_error = tree_error
        self.calls = []

    def clone(self, path, url, **options):
        self.calls.append(("clone", path, url, options))
        if self.clone_error:
            raise self.clone_error

    def fetch(self, path, depth, ref):
        self.calls.append(("fetch", path, depth, ref))
        if self.fetch_error:
            raise self.fetch_error

    def list_tree(self, path, ref, subdir):
        self.calls.append(("list_tree", path, ref, subdir))
        if self.tree_error:
            raise self.tree_error
        return list(self.tree)


@pytest.mark.parametrize(
    "raw, url, ref, path",
    [
        ("https://github.com/owner/repo", REPO, "", ""),
        ("https://github.com/owner/repo.git", REPO, "", ""),
        ("https://github.com/owner/repo/blob/main/path/to/file.go", REPO, "main", "path/to/file.go"),
        ("https://github.com/owner/repo/tree/dev/src/components", REPO, "dev", "src/components"),
        ("https://github.com/owner/repo/blob/v1.0.0/README.md", REPO, "v1.0.0", "README.md"),
        ("https://github.com/owner/repo/blob/abc123def456/src/main.go", REPO, "abc123def456", "src/main.go"),
        (
            "https://github.com/owner/repo/tree/main/deeply/nested/path/to/dir",
            REPO,
            "main",
            "deeply/nested/path/to/dir",
        ),
        ("https://github.com/owner/repo/", REPO, "", ""),
        ("  https://github.com/owner/repo  ", REPO, "", ""),
        ("\\https://github.com/owner/repo", REPO, "", ""),
        (
            "https://github.com/owner/repo/blob/main/path/file-name_v2.test.js",
            REPO,
            "main",
            "path/file-name_v2.test.js",
        ),
    ],
)
def test_parse_smart_url(raw, url, ref, path):
    explorer = RemoteExplorer(FakeGit(), FakeFS())
    assert explorer.parse_smart_url(raw) == (url, ref, path)


def test_parse_smart_url_falls_back_on_parse_error():
    explorer = RemoteExplorer(FakeGit(), FakeFS())
    assert explorer.parse_smart_url("https://bitbucket.org/owner") == ("https://bitbucket.org/owner", "", "")


@pytest.mark.parametrize(
    "url, name",
    [
        ("https://github.com/owner/repo", "github"),
        ("https://gitlab.com/owner/repo", "gitlab"),
        ("https://bitbucket.org/owner/repo", "bitbucket"),
        ("https://git.company.com/project/repo", "generic"),
    ],
)
def test_get_provider_name(url, name):
    assert RemoteExplorer(FakeGit(), FakeFS()).get_provider_name(url) == name


def test_list_local_dir():
    fs = FakeFS(entries=["file1.go", "file2.go", "subdir/"])
    items = RemoteExplorer(FakeGit(), fs).list_local_dir("/some/path")
    assert items == ["file1.go", "file2.go", "subdir/"]
    assert fs.read == ["/some/path"]


def test_fetch_repo_dir_happy_path(capsys):
    fs = FakeFS()
    git = FakeGit(tree=["file1.go", "file2.go", "subdir/"])
    files = RemoteExplorer(git, fs).fetch_repo_dir(REPO, "main", "src")

    assert files == ["file1.go", "file2.go", "subdir/"]
    assert git.calls == [
        ("clone", TEMP, REPO, {"filter": "blob:none", "no_checkout": True, "depth": 1}),
        ("fetch", TEMP, 0, "main"),
        ("list_tree", TEMP, "main", "src"),
    ]
    assert fs.created == [("", "git-vendor-index-*")]
    assert fs.removed == [TEMP]
    assert "Cloning repository" in capsys.readouterr().out


def test_fetch_repo_dir_clone_fails():
    fs = FakeFS()
    git = FakeGit(clone_error=RuntimeError("network timeout"))
    with pytest.raises(RuntimeError, match="network timeout"):
        RemoteExplorer(git, fs).fetch_repo_dir(REPO, "main", "src")
    assert fs.removed == [TEMP]


def test_fetch_repo_dir_specific_ref():
    git = FakeGit(tree=["file.go"])
    files = RemoteExplorer(git, FakeFS()).fetch_repo_dir(REPO, "v1.0.0", "")
    assert files == ["file.go"]
    assert ("fetch", TEMP, 0, "v1.0.0") in git.calls
    assert git.calls[-1] == ("list_tree", TEMP, "v1.0.0", "")


def test_fetch_repo_dir_list_tree_fails():
    fs = FakeFS()
    git = FakeGit(tree_error=RuntimeError("invalid tree object"))
    with pytest.raises(RuntimeError, match="invalid tree object"):
        RemoteExplorer(git, fs).fetch_repo_dir(REPO, "main", "nonexistent")
    assert fs.removed == [TEMP]


@pytest.mark.parametrize("ref", ["", "HEAD"])
def test_fetch_repo_dir_head_skips_fetch(ref):
    git = FakeGit(tree=["a"])
    RemoteExplorer(git, FakeFS()).fetch_repo_dir(REPO, ref, "")
    assert [call[0] for call in git.calls] == ["clone", "list_tree"]
    assert git.calls[-1] == ("list_tree", TEMP, "HEAD", "")


def test_fetch_repo_dir_ignores_fetch_failure():
    git = FakeGit(tree=["x.go"], fetch_error=RuntimeError("no such ref"))
    assert RemoteExplorer(git, FakeFS()).fetch_repo_dir(REPO, "dev", "lib") == ["x.go"]