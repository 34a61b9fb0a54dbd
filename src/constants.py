"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    CONFIG_ERROR = 3
    EMPTY_CATALOG = 4
    UNSUPPORTED_VERSION = 5


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CATALOG_URL = "https://hub.docker.com/v2/repositories/library/postgres/tags/"
    CATALOG_PAGE_SIZE = 100
    MAJOR_LINES = [13, 14, 15, 16, 17, 18]
    LATEST_TAG = "latest"
    OUTPUT_KEY = "versions"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    USER_AGENT = "tagmatrix/1.0"

    ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"
    ENV_LOG_LEVEL = "TAGMATRIX_LOG_LEVEL"
