import logging
import os
from typing import Optional, Union

MAGIC = b'HUF1'  # file signature
FORMAT_VERSION = 1

COMPRESSED_SUFFIX = ".huff"
RESTORED_SUFFIX = "_restored"

# extensions that rarely shrink any further
ALREADY_COMPRESSED_EXTS = (
    ".zip", ".gz", ".7z", ".rar", ".jpeg", ".jpg", ".png", ".gif",
    ".mp3", ".mp4", ".avi", ".mov", ".odt", ".docx", ".xlsx",
)

DOT_MAX_DEPTH = 3

LOG_LEVEL_ENV = "HUFFCODEC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
