class GitRepositoryException(Exception):
    """Base exception for all repository identity errors."""
    pass

class UrlParseException(GitRepositoryException):
    """Raised when a remote URL does not match the supported URL grammar."""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Url '{url}' could not be parsed.")

class RepositoryNotFoundException(GitRepositoryException):
    """Raised when repository metadata (root, HEAD, config, remote) cannot be found."""
    def __init__(self, target: str, message: str = "Could not find git repository"):
        self.target = target
        super().__init__(f"{message}: '{target}'.")

class AmbiguousConfigException(GitRepositoryException):
    """Raised when a remote section declares more than one url."""
    def __init__(self, remote: str, config_file: str):
        self.remote = remote
        self.config_file = config_file
        super().__init__(f"Remote '{remote}' has more than one url in '{config_file}'.")
