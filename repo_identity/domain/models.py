from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, computed_field

GIT_SUFFIX = ".git"

class GitRepository(BaseModel):
    """
    Immutable domain model representing the remote identity of a git repository.
    Built either from a remote URL or from a local checkout; never mutated in place.
    """
    # Enforces immutability: once created, fields cannot be modified.
    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(..., min_length=1, description="Host of the remote, for instance github.com")
    identifier: str = Field(..., min_length=1, description="Path of the repository on its endpoint, for instance org/repo")
    local_directory: Optional[str] = Field(
        default=None,
        description="Root directory of the checkout; None if parsed from a URL"
    )
    head: Optional[str] = Field(
        default=None,
        description="Raw first line of HEAD; None if parsed from a URL"
    )
    branch: Optional[str] = Field(
        default=None,
        description="Checked-out branch; None if HEAD is detached or unknown"
    )

    @computed_field
    @property
    def https_url(self) -> str:
        """Url in the form of https://endpoint/identifier.git"""
        return f"https://{self.endpoint}/{self.identifier}{GIT_SUFFIX}"

    @computed_field
    @property
    def ssh_url(self) -> str:
        """Url in the form of git@endpoint:identifier.git"""
        return f"git@{self.endpoint}:{self.identifier}{GIT_SUFFIX}"

    @property
    def is_detached(self) -> bool:
        # Only meaningful for repositories resolved from a local checkout.
        return self.head is not None and self.branch is None

    def with_branch(self, branch: Optional[str]) -> "GitRepository":
        """
        Returns a copy of this repository pointing at another branch.

        Args:
            branch (Optional[str]): The branch of the new instance.

        Returns:
            GitRepository: A new instance; this one is left untouched.
        """
        return self.model_copy(update={"branch": branch})

    def __str__(self) -> str:
        return self.https_url.removesuffix(GIT_SUFFIX)
