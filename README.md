# gitvendor

Building blocks for copying selected files and directories from remote git
repositories into a project, pinned to exact commits: URL parsing for the
common hosting sites, a sync service, an update checker, a parallel
executor and structured output records.

## Parsing repository URLs

Links copied from a hosting site are split into a repository URL, a ref and
a path inside the repository. GitHub, GitLab (including nested groups and
self-hosted instances using `/-/blob/` or `/-/tree/`) and Bitbucket links
are recognised; any other URL is normalised by a generic fallback that
returns an empty ref and path.

```python
from gitvendor.providers.registry import ProviderRegistry

registry = ProviderRegistry()
registry.parse_url("https://github.com/owner/repo/blob/main/src/file.go")
# ('https://github.com/owner/repo', 'main', 'src/file.go')

registry.detect_provider("https://gitlab.com/owner/repo").name
# 'gitlab'
```

The individual providers live in `gitvendor.providers.github`
(`GitHubProvider`, `clean_url`), `gitvendor.providers.gitlab`,
`gitvendor.providers.bitbucket` and `gitvendor.providers.generic`.
`GitLabProvider.parse_url` and `BitbucketProvider.parse_url` raise
`ValueError` for URLs they cannot split.

`RemoteExplorer.parse_smart_url` (in `gitvendor.remote`) gives the same
result as the registry, but a URL that raises `ValueError` comes back
unchanged with an empty ref and path. `RemoteExplorer.get_provider_name`
returns the detected provider's name.

## Syncing vendors

`gitvendor.sync.SyncService` loads the vendor configuration and the
lockfile, then fetches each selected vendor at its locked commit (or at the
latest commit when no lock exists or `force` is set) and copies the mapped
paths into the project.

```python
from gitvendor.models import SyncOptions, ParallelOptions

service.sync(SyncOptions(vendor_name="my-lib"))
service.sync(SyncOptions(group_name="frontend", dry_run=True))
service.sync(SyncOptions(parallel=ParallelOptions(enabled=True, max_workers=4)))
```

Options (`SyncOptions`):

- `dry_run` – print the sync plan without touching git or the file system.
- `vendor_name` / `group_name` – restrict the sync to one vendor or group.
  An unknown name raises `VendorNotFoundError` or `GroupNotFoundError`.
- `force` – ignore the lockfile and fetch the latest commit.
- `no_cache` – skip the incremental cache check and do not update the cache.
- `parallel` – a `ParallelOptions` value; with `enabled=True` vendors are
  synced by `ParallelExecutor` on at most 8 threads (`max_workers=0` means
  one per CPU, still capped at 8).

Other failures raise `SyncError`, for instance a fetch that fails both
shallow and full, a locked commit that no longer exists upstream, or a
failing pre- or post-sync hook. In parallel mode a failure surfaces as
`gitvendor.parallel.ParallelExecutionError`, which names the failing
vendor and carries every `VendorResult` in `results`.

## Checking for updates

`gitvendor.update_checker.UpdateChecker.check_updates()` compares every
locked commit with the latest commit of its ref and returns a list of
`UpdateCheckResult` values (`vendor_name`, `ref`, `current_hash`,
`latest_hash`, `last_updated`, `up_to_date`). Refs without a lock entry are
skipped; a ref whose fetch fails is reported through the UI's
`show_warning` and skipped. Failing to load the configuration or lockfile
raises `UpdateCheckError`.

## Output modes

`gitvendor.output` holds `OutputMode` (`NORMAL`, `QUIET`, `JSON`),
`NonInteractiveFlags` and the `JSONOutput` / `JSONError` records used for
machine-readable output. Empty optional fields are left out:

```python
from gitvendor.output import JSONOutput

JSONOutput(status="success", message="done").to_json()
# '{"status":"success","message":"done"}'
```

## What you supply

The services work against objects you pass in; the package does not
include a git client, file system layer, configuration or lockfile
storage, file copier, license handling, sync cache, hook runner or
progress UI, and it has no command-line program. The objects are used
as follows:

- config store: `load()` returning an object with `vendors`; each vendor
  has `name`, `url`, `groups`, `hooks` (with `pre_sync` / `post_sync`) and
  `specs`, each spec has `ref` and `mapping`, each mapping has `from_` and
  `to`.
- lock store: `load()` returning an object with `vendors` entries having
  `name`, `ref`, `commit_hash` and `updated`.
- git client: `init`, `add_remote`, `fetch(dir, depth, ref)`, `fetch_all`,
  `checkout`, `get_head_hash`, `clone(dir, url, filter=, no_checkout=,
  depth=)` and `list_tree(dir, ref, subdir)`.
- file system: `create_temp(dir, pattern)`, `remove_all(path)` and
  `read_dir(path)`.
- file copier: `copy_mappings(temp_dir, vendor, spec)` returning
  `CopyStats`; license handler: `copy_license(temp_dir, vendor_name)`.
- cache: `load`, `compute_file_checksum`, `build_cache` and `save`.
- hooks: `execute_pre_sync(vendor, ctx)` and `execute_post_sync(vendor, ctx)`.
- UI: `style_title`, `show_warning`, and `start_progress(total, label)`
  returning an object with `increment`, `fail` and `complete`.