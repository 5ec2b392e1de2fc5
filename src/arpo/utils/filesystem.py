"""Filesystem primitives used by the catalog and the mover."""

import errno
import os
import shutil
from pathlib import Path

STAGING_SUFFIX = ".arpo-partial"
MOVING_SUFFIX = ".arpo-moving"


def directory_exists(path: Path) -> bool:
    """
    Check whether ``path`` exists.

    Missing paths return False. Any other stat failure (permission denied,
    I/O error) is raised to the caller.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def list_child_directories(root: Path) -> list[tuple[str, Path]]:
    """
    List the immediate child directories of ``root``.

    Args:
        root: Directory to enumerate

    Returns:
        (name, path) pairs in enumeration order. Files are skipped.

    Raises:
        OSError: If ``root`` is missing or cannot be read
    """
    root = Path(root)
    children = []
    with os.scandir(root) as it:
        for dirent in it:
            if dirent.is_dir(follow_symlinks=False):
                children.append((dirent.name, root / dirent.name))
    return children


def move_directory(src: Path, dst: Path) -> None:
    """
    Relocate directory ``src`` to ``dst`` as a single step.

    Intermediate destination directories are created. ``dst`` must not exist.
    On the same filesystem this is one rename. Across filesystems the tree is
    copied to a staging directory beside ``dst`` and renamed into place; the
    source is renamed aside first so that on success ``src`` is gone and on
    failure it is restored.

    Raises:
        FileExistsError: If ``dst`` already exists
        OSError: If the move fails; the source is left where it was
    """
    src = Path(src)
    dst = Path(dst)

    dst.parent.mkdir(parents=True, exist_ok=True)
    if dst.exists() or dst.is_symlink():
        raise FileExistsError(errno.EEXIST, "Destination already exists", str(dst))

    try:
        os.rename(src, dst)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise

    _move_across_devices(src, dst)


def _move_across_devices(src: Path, dst: Path) -> None:
    parked = src.with_name(f".{src.name}{MOVING_SUFFIX}")
    staging = dst.with_name(f".{dst.name}{STAGING_SUFFIX}")

    os.rename(src, parked)
    try:
        shutil.copytree(parked, staging, symlinks=True)
        os.rename(staging, dst)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        os.rename(parked, src)
        raise

    # The archive copy is complete; a leftover parked tree is only clutter
    shutil.rmtree(parked, ignore_errors=True)
