"""
Read-only access to the on-disk metadata of a git checkout.

Nothing here spawns a git process or writes to disk: the root directory,
the worktree indirection, HEAD and the remote configuration are all read
straight from the files under `.git`.
"""
import logging
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from repo_identity.domain.exceptions import AmbiguousConfigException, RepositoryNotFoundException

logger = logging.getLogger(__name__)

GIT_ENTRY = ".git"
HEAD_FILE = "HEAD"
CONFIG_FILE = "config"
COMMONDIR_FILE = "commondir"
GITDIR_KEY = "gitdir:"
URL_KEY = "url ="
BRANCH_REF_PATTERN = re.compile(r"^ref: refs/heads/(?P<branch>.*)")

PathLike = Union[str, Path]


class MetadataDirectories(NamedTuple):
    """Where the shared config lives and where the HEAD of this checkout lives."""
    git_directory: Path
    worktree_directory: Path
    is_worktree: bool


class HeadInfo(NamedTuple):
    head: str
    branch: Optional[str]


def find_root_directory(directory: PathLike) -> Path:
    """
    Walks up from `directory` until an ancestor containing a `.git` entry is found.

    Raises:
        RepositoryNotFoundException: If the filesystem root is reached without a match.
    """
    start = Path(directory).absolute()
    for candidate in (start, *start.parents):
        if (candidate / GIT_ENTRY).exists():
            logger.debug(f"Found repository root '{candidate}' for '{directory}'.")
            return candidate

    raise RepositoryNotFoundException(str(directory), "Could not find root directory for")


def resolve_metadata_directories(root_directory: PathLike) -> MetadataDirectories:
    """
    Resolves the metadata directories of the checkout rooted at `root_directory`.

    A primary checkout has a `.git` directory holding everything. A linked
    working tree has a `.git` file pointing (`gitdir: <path>`) at its own
    metadata directory, which lives at `<shared>/worktrees/<name>`.
    """
    root = Path(root_directory)
    git_entry = root / GIT_ENTRY
    if git_entry.is_dir():
        return MetadataDirectories(git_entry, git_entry, False)

    worktree_directory = _read_gitdir(git_entry)
    if not worktree_directory.is_absolute():
        worktree_directory = root / worktree_directory

    git_directory = _read_commondir(worktree_directory)
    if git_directory is None:
        git_directory = worktree_directory.parent.parent

    logger.debug(f"'{root}' is a linked worktree of '{git_directory}' (metadata in '{worktree_directory}').")
    return MetadataDirectories(git_directory, worktree_directory, True)


def _read_gitdir(git_file: Path) -> Path:
    gitdir = None
    with open(git_file, encoding="utf-8") as reader:
        for line in reader:
            if line.startswith(GITDIR_KEY):
                gitdir = line[len(GITDIR_KEY):].strip()

    if not gitdir:
        raise RepositoryNotFoundException(str(git_file), "No gitdir pointer in")
    return Path(gitdir)


def _read_commondir(worktree_directory: Path) -> Optional[Path]:
    # Newer layouts record the shared directory explicitly, relative to the worktree metadata.
    commondir_file = worktree_directory / COMMONDIR_FILE
    if not commondir_file.is_file():
        return None

    with open(commondir_file, encoding="utf-8") as reader:
        commondir = reader.readline().strip()

    if not commondir:
        return None
    return worktree_directory / commondir


def read_head(worktree_directory: PathLike) -> HeadInfo:
    """
    Reads the first line of HEAD and infers the checked-out branch from it.

    A detached HEAD (typically a commit hash) is returned verbatim with no branch.

    Raises:
        RepositoryNotFoundException: If HEAD is missing or empty.
    """
    head_file = Path(worktree_directory) / HEAD_FILE
    if not head_file.is_file():
        raise RepositoryNotFoundException(str(head_file), "Could not find HEAD file")

    with open(head_file, encoding="utf-8") as reader:
        head = reader.readline().rstrip("\r\n")

    if not head:
        raise RepositoryNotFoundException(str(head_file), "HEAD file is empty")

    match = BRANCH_REF_PATTERN.match(head)
    branch = match.group("branch") if match else None
    logger.debug(f"HEAD is '{head}' (branch: {branch}).")
    return HeadInfo(head, branch)


def read_remote_url(git_directory: PathLike, remote: str = "origin") -> str:
    """
    Scans the git config for the url of `remote`.

    Only the narrow shape git itself writes is understood: a `[remote "<name>"]`
    header followed by `url = <value>` up to the next section header.

    Raises:
        RepositoryNotFoundException: If the config, the section or the url is missing.
        AmbiguousConfigException: If the section declares more than one url.
    """
    config_file = Path(git_directory) / CONFIG_FILE
    if not config_file.is_file():
        raise RepositoryNotFoundException(str(config_file), "Could not find git config")

    with open(config_file, encoding="utf-8") as reader:
        section = _remote_section(reader, remote)

    if section is None:
        raise RepositoryNotFoundException(remote, "Could not find remote")

    url_lines = [line for line in section if line.lower().startswith(URL_KEY)]
    if len(url_lines) > 1:
        raise AmbiguousConfigException(remote, str(config_file))
    if not url_lines:
        raise RepositoryNotFoundException(remote, "Could not parse remote URL for")

    url = url_lines[0].split("=", 1)[1].strip()
    logger.debug(f"Remote '{remote}' points at '{url}'.")
    return url


def _remote_section(lines, remote: str) -> Optional[List[str]]:
    header = f'[remote "{remote}"]'
    section = None
    for line in (raw.strip() for raw in lines):
        if section is None:
            if line == header:
                section = []
        elif line.startswith("["):
            break
        else:
            section.append(line)
    return section
