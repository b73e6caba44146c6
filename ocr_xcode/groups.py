"""
Group synchronization.

A synced group is reset to an empty child list every run and then
repopulated, so nothing from a previous run survives as a duplicate or an
orphan.
"""

import logging
from typing import Optional

from .exceptions import GroupNotFoundError
from .model import ProjectModel

logger = logging.getLogger(__name__)


def split_path(path: str) -> list:
    return [part for part in path.split("/") if part]


def find_group(model: ProjectModel, parent, subpath: str):
    """Resolve a slash-separated subpath below parent without creating anything."""
    group = parent
    for part in split_path(subpath):
        group = model.child_group(group, part)
        if group is None:
            return None
    return group


def require_group(model: ProjectModel, parent, subpath: str):
    group = find_group(model, parent, subpath)
    if group is None:
        raise GroupNotFoundError(subpath)
    return group


def ensure_group(model: ProjectModel, parent, subpath: str):
    """Find or create every group along subpath, leaving existing contents alone."""
    group = parent
    for part in split_path(subpath):
        child = model.child_group(group, part)
        group = child if child is not None else model.new_group(group, part, part)
    return group


def sync_group(model: ProjectModel, parent, name: str, path: Optional[str] = None):
    """
    Return the group called name under parent with no children.

    An existing group is cleared (recursively, build phase entries
    included). A missing one is created as the last child of parent.
    """
    group = model.child_group(parent, name)
    if group is not None:
        removed = model.remove_children(group)
        logger.info(f"Cleared group {name} ({removed} objects removed)")
        return group

    group = model.new_group(parent, name, path if path is not None else name)
    logger.info(f"Created group {name}")
    return group


def sync_group_path(model: ProjectModel, root, subpath: str):
    """Sync the last component of subpath; intermediate groups are only ensured."""
    parts = split_path(subpath)
    if not parts:
        raise ValueError("Group path must not be empty")
    parent = ensure_group(model, root, "/".join(parts[:-1]))
    return sync_group(model, parent, parts[-1])
