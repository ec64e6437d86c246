import logging
from typing import Optional

from repo_identity.domain.models import GitRepository
from repo_identity.infrastructure.git_metadata import (
    PathLike,
    find_root_directory,
    read_head,
    read_remote_url,
    resolve_metadata_directories,
)
from repo_identity.infrastructure.url_parser import parse_url

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


class GitRepositoryService:
    """
    Builds GitRepository instances, either from a remote URL or from a local checkout.
    Local resolution reads the `.git` metadata directly and never invokes git.
    """

    @staticmethod
    def from_url(url: str, branch: Optional[str] = None) -> GitRepository:
        endpoint, identifier = parse_url(url)
        return GitRepository(endpoint=endpoint, identifier=identifier, branch=branch)

    @staticmethod
    def from_local_directory(
        directory: PathLike,
        branch: Optional[str] = None,
        remote: str = DEFAULT_REMOTE,
    ) -> GitRepository:
        """
        Obtains the repository identity of the checkout containing `directory`.

        Args:
            directory (PathLike): Any directory inside the checkout.
            branch (Optional[str]): Overrides the branch read from HEAD when given.
            remote (str): Name of the remote whose url identifies the repository.

        Returns:
            GitRepository: The fully populated repository.
        """
        root_directory = find_root_directory(directory)
        directories = resolve_metadata_directories(root_directory)

        head_info = read_head(directories.worktree_directory)
        url = read_remote_url(directories.git_directory, remote)
        endpoint, identifier = parse_url(url)

        repository = GitRepository(
            endpoint=endpoint,
            identifier=identifier,
            local_directory=str(root_directory),
            head=head_info.head,
            branch=branch if branch is not None else head_info.branch,
        )

        logger.info(
            f"Resolved '{root_directory}' to {repository} "
            f"(branch: {repository.branch}, worktree: {directories.is_worktree})."
        )
        return repository
