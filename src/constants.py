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
    API_ERROR = 4


class Platforms(Enum):
    """Platforms accepted by Hangar for uploaded files.

    Args:
        Enum (string): Platform identifiers as used by the Hangar API.
    """

    PAPER = "PAPER"
    WATERFALL = "WATERFALL"
    VELOCITY = "VELOCITY"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MOJANG_MANIFEST_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
    PAPERMC_API_BASE = "https://api.papermc.io/v2"
    HANGAR_API_BASE = "https://hangar.papermc.io/api/v1"
    SUPPORTED_PLATFORMS = [
        Platforms.PAPER.value,
        Platforms.WATERFALL.value,
        Platforms.VELOCITY.value,
    ]
    # Platforms whose versions come from the PaperMC project API
    PAPERMC_PLATFORMS = [
        Platforms.WATERFALL.value,
        Platforms.VELOCITY.value,
    ]
    # Substrings that mark a PaperMC project version as not release quality
    PRERELEASE_MARKERS = ["pre", "snapshot"]
    LATEST_TOKEN = "latest"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    MAX_WORKERS = 1
    USER_AGENT = "hangar-upload"
    ENV_PREFIX = "HANGAR_UPLOAD_"
    ENV_LOG_LEVEL = "HANGAR_UPLOAD_LOG_LEVEL"
    ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"
    CONFIG_SECTION = "hangar_upload"
