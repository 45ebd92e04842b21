"""
Tabletop Simulator "Saved Objects" writer.

A saved object is a pair of files sharing a name: the JSON document and a
PNG thumbnail TTS shows in its object browser. The thumbnail is mandatory.
"""

import logging
import sys
from pathlib import Path

from tabledeck.config import settings
from tabledeck.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

# Relative to the user's home directory
SAVED_OBJECTS_SUBDIRS = {
    "win32": Path("Documents", "My Games", "Tabletop Simulator", "Saves", "Saved Objects"),
    "darwin": Path("Library", "Tabletop Simulator", "Saves", "Saved Objects"),
    "linux": Path(".local", "share", "Tabletop Simulator", "Saves", "Saved Objects"),
}


class SaveError(KnownError):
    """Base class for failures writing a saved object."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        cause: OSError | None = None,
        suggestion: str | None = None,
    ):
        self.path = path
        self.cause = cause
        super().__init__(
            kind=FailureKind.IO_ERROR,
            message=message,
            suggestion=suggestion,
            status_code=500,
        )


class ObjectWriteError(SaveError):
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Failed to write the object at {path} with error: {cause}", path, cause)


class ImageWriteError(SaveError):
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Failed to write the image at {path} with error: {cause}", path, cause)


class SaveDirectoryNotFoundError(SaveError):
    def __init__(self) -> None:
        super().__init__(
            "Couldn't find Tabletop Simulator's saved object files",
            suggestion="Pass --output-dir or set TABLEDECK_SAVED_OBJECTS_DIR.",
        )


def get_saved_objects_dir() -> Path | None:
    """
    Locate TTS's Saved Objects directory.

    Returns settings.saved_objects_dir when configured, otherwise the
    platform default under the home directory. None on unsupported
    platforms or when the home directory cannot be determined.
    """
    if settings.saved_objects_dir is not None:
        return settings.saved_objects_dir

    subdir = SAVED_OBJECTS_SUBDIRS.get(sys.platform)
    if subdir is None:
        return None
    try:
        return Path.home() / subdir
    except RuntimeError:
        return None


def write_saved_object(
    name: str,
    contents: str | bytes,
    image: bytes,
    directory: Path | None = None,
) -> Path:
    """
    Write a saved object (`<name>.json` + `<name>.png`).

    Args:
        name: File stem, shown by TTS as the object's name
        contents: Serialized document
        image: PNG thumbnail
        directory: Target directory. Defaults to get_saved_objects_dir()

    Returns:
        Path of the written JSON file

    Raises:
        SaveDirectoryNotFoundError: If no target directory can be found
        ObjectWriteError: If the JSON file cannot be written
        ImageWriteError: If the thumbnail cannot be written
    """
    if directory is None:
        directory = get_saved_objects_dir()
    if directory is None:
        raise SaveDirectoryNotFoundError()

    if isinstance(contents, str):
        contents = contents.encode("utf-8")

    json_path = directory / f"{name}.json"
    try:
        json_path.write_bytes(contents)
    except OSError as e:
        raise ObjectWriteError(json_path, e) from e

    image_path = json_path.with_suffix(".png")
    try:
        image_path.write_bytes(image)
    except OSError as e:
        raise ImageWriteError(image_path, e) from e

    logger.info("Wrote saved object %s", json_path)
    return json_path
