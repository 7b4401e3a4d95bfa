# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathResolver - Source tree and location handling for tree objects.

Every object of the group tree stores a ``path`` relative to the root
named by its ``source_tree``:

    - '<absolute>': the path is absolute
    - '<group>': relative to the real path of the containing group
    - 'SOURCE_ROOT': relative to the project directory
    - 'DEVELOPER_DIR', 'BUILT_PRODUCTS_DIR', 'SDKROOT': relative to a
      directory known only at build time; the Project may map them to
      real directories, otherwise they resolve to '${KEY}' placeholders

Source trees can be given by key ('group', 'source_root', ...) or by
stored value ('<group>', 'SOURCE_ROOT', ...).

Example:
    >>> project = Project('/work/App')
    >>> group = project.main_group.new_group('Sources')
    >>> PathResolver.set_path_with_source_tree(group, '/work/App/Sources', 'group')
    >>> group.path
    'Sources'
    >>> PathResolver.real_path_of(group)
    PosixPath('/work/App/Sources')
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from .constants import (
    ABSOLUTE,
    GROUP,
    SOURCE_ROOT,
    SOURCE_TREE_VALUES,
    SOURCE_TREES_BY_KEY,
)
from .exceptions import ConsistencyError, PathResolutionError, UnknownSourceTreeError

if TYPE_CHECKING:
    from .group import Group
    from .node import ProjectObject
    from .project import Project

logger = logging.getLogger(__name__)


def _clean(path: str | PurePosixPath) -> PurePosixPath:
    """Lexically normalize path, collapsing '.' and '..' components."""
    return PurePosixPath(posixpath.normpath(str(path)))


def relative_path_from(
    path: str | PurePosixPath, base: str | PurePosixPath
) -> PurePosixPath:
    """Compute the path of ``path`` relative to ``base`` without touching disk.

    Args:
        path: Target path.
        base: Directory the result is relative to.

    Returns:
        Relative path, using '..' steps when path is not below base.

    Raises:
        PathResolutionError: If one path is absolute and the other is not,
            or base climbs above a relative path with '..'.

    Example:
        >>> relative_path_from('/a/b/c', '/a/d')
        PurePosixPath('../b/c')
    """
    path = _clean(path)
    base = _clean(base)
    if path.is_absolute() != base.is_absolute():
        raise PathResolutionError(
            f"Cannot compute '{path}' relative to '{base}': different prefix"
        )

    path_parts = [p for p in path.parts if p != '.']
    base_parts = [p for p in base.parts if p != '.']
    common = 0
    for a, b in zip(path_parts, base_parts):
        if a != b:
            break
        common += 1

    climb = base_parts[common:]
    if '..' in climb:
        raise PathResolutionError(
            f"Cannot compute '{path}' relative to '{base}'"
        )
    parts = ['..'] * len(climb) + path_parts[common:]
    return PurePosixPath(*parts) if parts else PurePosixPath('.')


class PathResolver:
    """Resolution of parents and locations of group tree objects.

    All methods are static; the class is a namespace shared by the nodes,
    the reference factory and the project.
    """

    # ==================== Source Trees ====================

    @staticmethod
    def normalize_source_tree(source_tree: str) -> str:
        """Return the stored value for a source tree key or value.

        Raises:
            UnknownSourceTreeError: If source_tree is not recognized.
        """
        if source_tree in SOURCE_TREES_BY_KEY:
            return SOURCE_TREES_BY_KEY[source_tree]
        if source_tree in SOURCE_TREE_VALUES:
            return source_tree
        raise UnknownSourceTreeError(
            f"Unrecognized source tree option '{source_tree}'. "
            f"Valid keys: {', '.join(SOURCE_TREES_BY_KEY)}"
        )

    # ==================== Parents ====================

    @staticmethod
    def is_main_group(obj: ProjectObject) -> bool:
        """True if obj is the main group of its project."""
        return obj.project is not None and obj is obj.project.main_group

    @staticmethod
    def parent_of(obj: ProjectObject) -> Group | Project | None:
        """Return the containing group, the Project for the main group, or None."""
        if PathResolver.is_main_group(obj):
            return obj.project
        return obj._parent

    @staticmethod
    def parents_of(obj: ProjectObject) -> list[Group]:
        """Return the ancestor groups, outermost first."""
        result: list[Group] = []
        parent = obj._parent
        while parent is not None:
            result.append(parent)
            parent = parent._parent
        result.reverse()
        return result

    @staticmethod
    def hierarchy_path_of(obj: ProjectObject) -> str | None:
        """Return the '/' separated display names from the main group.

        The main group itself has no hierarchy path.

        Raises:
            ConsistencyError: If obj is not attached to a group.
        """
        if PathResolver.is_main_group(obj):
            return None
        parent = obj._parent
        if parent is None:
            raise ConsistencyError(
                f"No parent for object '{obj.display_name}'"
            )
        parent_path = PathResolver.hierarchy_path_of(parent) or ''
        return f"{parent_path}/{obj.display_name or ''}"

    # ==================== Real Paths ====================

    @staticmethod
    def _require_project(obj: ProjectObject) -> Project:
        if obj.project is None:
            raise ConsistencyError(
                f"Object '{obj.display_name}' does not belong to a project"
            )
        return obj.project

    @staticmethod
    def source_tree_real_path(obj: ProjectObject) -> Path | None:
        """Return the directory obj.path is relative to.

        Returns:
            The resolved root, or None for absolute source trees.

        Raises:
            ConsistencyError: If a group relative object has no parent, or
                a project relative object has no project.
        """
        return PathResolver._root_for(obj, obj.source_tree)

    @staticmethod
    def _root_for(obj: ProjectObject, source_tree: str) -> Path | None:
        if source_tree == ABSOLUTE:
            return None

        if source_tree == GROUP:
            parent = PathResolver.parent_of(obj)
            if parent is None:
                raise ConsistencyError(
                    f"No parent for object '{obj.display_name}'"
                )
            if parent is obj.project:
                project = obj.project
                return Path(_clean(Path(project.project_dir) / project.project_dir_path))
            return PathResolver.real_path_of(parent)

        project = PathResolver._require_project(obj)
        if source_tree == SOURCE_ROOT:
            return Path(project.project_dir)
        return project.root_for(source_tree)

    @staticmethod
    def real_path_of(obj: ProjectObject) -> Path:
        """Return the path of obj with its source tree resolved."""
        root = PathResolver.source_tree_real_path(obj)
        path = obj.path or ''
        if root is None:
            return Path(_clean(path)) if path else Path(path)
        return Path(_clean(root / path))

    @staticmethod
    def set_path_with_source_tree(
        obj: ProjectObject, path: str | Path, source_tree: str
    ) -> None:
        """Point obj to path, storing it relative to the given source tree.

        The object must already be attached when the source tree is
        '<group>', since its parent's location is the root.

        Args:
            obj: The object to update.
            path: The target path, preferably absolute.
            source_tree: Source tree key or value.

        Raises:
            UnknownSourceTreeError: If source_tree is not recognized.
            ConsistencyError: If the root of source_tree cannot be resolved
                for obj. obj is left unchanged.
        """
        target = PurePosixPath(path)
        source_tree = PathResolver.normalize_source_tree(source_tree)

        root = PathResolver._root_for(obj, source_tree)
        if root is None:
            stored = target
        else:
            stored = PathResolver._relative_to_root(target, PurePosixPath(root))
        obj.source_tree = source_tree
        obj.path = str(stored)
        logger.debug(
            "Set path of %r to %r (%s)", obj, obj.path, obj.source_tree
        )

    @staticmethod
    def _relative_to_root(target: PurePosixPath, root: PurePosixPath) -> PurePosixPath:
        """Express target relative to root when both live in the same space.

        A relative target not below a relative root is taken as already
        relative to it.
        """
        if target.is_absolute() != root.is_absolute():
            return target
        if not target.is_absolute():
            root_parts = _clean(root).parts
            if _clean(target).parts[:len(root_parts)] != root_parts:
                return target
        return relative_path_from(target, root)

    # ==================== Moving ====================

    @staticmethod
    def move(obj: ProjectObject, new_parent: Group) -> None:
        """Move obj to the end of new_parent's children.

        Raises:
            ConsistencyError: If obj is the main group, new_parent is obj
                itself or lies in obj's subtree.
        """
        if new_parent is None:
            raise ConsistencyError(f"Attempt to move '{obj.display_name}' to no parent")
        if PathResolver.is_main_group(obj):
            raise ConsistencyError("The main group cannot be moved")
        if new_parent is obj:
            raise ConsistencyError(
                f"Attempt to move '{obj.display_name}' to itself"
            )
        if obj in PathResolver.parents_of(new_parent):
            raise ConsistencyError(
                f"Attempt to move '{obj.display_name}' to its child "
                f"'{new_parent.display_name}'"
            )

        if obj._parent is not None:
            obj._parent._remove_child(obj)
        new_parent._insert_child(obj)
        logger.debug("Moved %r to %r", obj, new_parent)
