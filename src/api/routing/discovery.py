"""Route discovery from the endpoints directory tree.

The directory tree under the endpoints root is the route table: every file
becomes one RouteEntry, and the file's directory (relative to the root)
becomes the URL prefix its router is mounted under. A file at
``examples/endpoint.py`` is therefore mounted at ``/examples`` and is
logged as ``/examples/endpoint``.

Discovery walks directories in name order so that the same tree always
produces the same sequence of entries. Symlinked directories are followed
unless they point back to a directory on the current branch.
"""

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath

from loguru import logger

from src.core.exceptions import RouteDiscoveryError

DEFAULT_IGNORED_NAMES = frozenset({"__pycache__"})

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class RouteEntry:
    """A discovered endpoint file and the URL prefix it mounts under.

    Attributes:
        absolute_path: Location of the endpoint module on disk.
        relative_path: Path relative to the endpoints root.
        mount_prefix: Absolute URL prefix derived from the relative directory.
        endpoint_name: Display name used in logs, not for routing.
    """

    absolute_path: Path
    relative_path: Path
    mount_prefix: str
    endpoint_name: str

    @property
    def file_name(self) -> str:
        """Base name of the file, extension included."""
        return self.relative_path.name

    @property
    def stem(self) -> str:
        """Base name of the file without its extension."""
        return self.relative_path.stem

    @property
    def suffix(self) -> str:
        """File extension, including the leading dot."""
        return self.relative_path.suffix


def mount_prefix_for(relative_path: PurePath) -> str:
    """Compute the mount prefix of a file relative to the endpoints root.

    Args:
        relative_path: File path relative to the endpoints root.

    Returns:
        str: ``/`` followed by the directory part using ``/`` separators,
            or exactly ``/`` for files directly under the root.
    """
    directory = relative_path.parent.as_posix()
    if directory in ("", "."):
        return "/"
    return "/" + directory.replace("\\", "/")


def format_endpoint_name(mount_prefix: str, stem: str) -> str:
    """Build the logging name of an endpoint.

    Args:
        mount_prefix: The entry's mount prefix.
        stem: File name without extension.

    Returns:
        str: Prefix and stem joined by ``/``, whitespace replaced by ``_``.
    """
    prefix = "" if mount_prefix == "/" else mount_prefix
    return _WHITESPACE.sub("_", f"{prefix}/{stem}")


def path_from_file_name(file_name: str | os.PathLike[str]) -> str:
    """Return the leaf route path for an endpoint module.

    Endpoint modules call this with ``__file__`` so that the route they
    register matches their file name.

    Args:
        file_name: Path of the endpoint module.

    Returns:
        str: ``/`` followed by the file name without extension.

    Examples:
        >>> path_from_file_name("/srv/endpoints/examples/endpoint.py")
        '/endpoint'
    """
    return f"/{Path(file_name).stem}"


def build_route_entry(path: Path, root: Path) -> RouteEntry:
    """Convert a discovered file into a RouteEntry.

    Args:
        path: Absolute path of the file.
        root: The endpoints root the file was found under.

    Returns:
        RouteEntry: Entry with mount prefix and endpoint name filled in.
    """
    relative_path = path.relative_to(root)
    mount_prefix = mount_prefix_for(relative_path)
    return RouteEntry(
        absolute_path=path,
        relative_path=relative_path,
        mount_prefix=mount_prefix,
        endpoint_name=format_endpoint_name(mount_prefix, relative_path.stem),
    )


def _list_files(
    directory: Path,
    ignored_names: frozenset[str],
    ancestors: frozenset[Path] = frozenset(),
) -> list[Path]:
    """Recursively list files under a directory in name order.

    ``ancestors`` holds the resolved directories on the current branch. A
    symlink back to one of them is a cycle and is skipped; a directory
    reached again on another branch is listed again.
    """
    real_directory = directory.resolve()
    if real_directory in ancestors:
        logger.warning("Skipping symlink cycle at {}", directory)
        return []
    ancestors = ancestors | {real_directory}

    files: list[Path] = []
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if child.name in ignored_names:
            continue
        if child.is_file():
            files.append(child)
        elif child.is_dir():
            files.extend(_list_files(child, ignored_names, ancestors))
    return files


def discover_routes(
    root: str | os.PathLike[str],
    *,
    ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES,
) -> list[RouteEntry]:
    """Scan the endpoints root and return one RouteEntry per file.

    Args:
        root: Directory tree holding the endpoint modules.
        ignored_names: File or directory names to skip anywhere in the tree.

    Returns:
        list[RouteEntry]: Entries in traversal order.

    Raises:
        RouteDiscoveryError: If the root is missing, not a directory, or
            cannot be read.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise RouteDiscoveryError(root_path, "directory does not exist")
    if not root_path.is_dir():
        raise RouteDiscoveryError(root_path, "not a directory")

    root_path = root_path.resolve()
    try:
        files = _list_files(root_path, frozenset(ignored_names))
    except OSError as exc:
        raise RouteDiscoveryError(root_path, str(exc)) from exc

    entries = [build_route_entry(path, root_path) for path in files]
    logger.debug("Discovered {} endpoint files in {}", len(entries), root_path)
    return entries
