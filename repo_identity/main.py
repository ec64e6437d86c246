import os
import sys
import logging
from dotenv import load_dotenv

from repo_identity.application.repository_service import DEFAULT_REMOTE, GitRepositoryService
from repo_identity.domain.exceptions import GitRepositoryException

logger = logging.getLogger(__name__)

def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

def main() -> None:
    # Load environment variables from .env file
    load_dotenv()
    configure_logging()

    url = os.getenv("GIT_REPOSITORY_URL")
    directory = os.getenv("GIT_REPOSITORY_DIRECTORY") or os.getcwd()
    remote = os.getenv("GIT_REMOTE") or DEFAULT_REMOTE
    branch = os.getenv("GIT_BRANCH") or None

    try:
        if url:
            repository = GitRepositoryService.from_url(url, branch=branch)
        else:
            repository = GitRepositoryService.from_local_directory(directory, branch=branch, remote=remote)
    except GitRepositoryException as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"An unexpected error occurred: {e}")
        sys.exit(1)

    print(repository.model_dump_json(indent=2))

if __name__ == "__main__":
    main()
