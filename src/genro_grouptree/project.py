# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Project - The document owning a group tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, TypeVar

from .group import Group
from .node import ProjectObject
from .paths import PathResolver

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=ProjectObject)


class Project:
    """A project document: registers objects and roots the group tree.

    The project creates the objects of its tree with new(), keeps them in
    creation order in ``objects`` and forgets them when they are removed.
    Its ``main_group`` is the root of the group tree.

    Args:
        project_dir: Directory containing the project; the root of
            'SOURCE_ROOT' paths.
        project_dir_path: Path of the main group's folder relative to
            project_dir (usually empty).
        source_tree_roots: Directories for the build time source trees,
            keyed by source tree key or value, for example
            ``{'developer_dir': '/Applications/Xcode.app/Contents/Developer'}``.
            Unmapped source trees resolve to '${KEY}' placeholders.

    Example:
        >>> project = Project('/work/App', source_tree_roots={'sdk_root': '/SDKs/iOS'})
        >>> main = project.main_group
        >>> main.display_name
        'Main Group'
        >>> project.root_for('SDKROOT')
        PosixPath('/SDKs/iOS')
    """

    def __init__(
        self,
        project_dir: str | Path,
        project_dir_path: str = '',
        source_tree_roots: dict[str, str | Path] | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.project_dir_path = project_dir_path
        self._source_tree_roots: dict[str, Path] = {}
        for key, root in (source_tree_roots or {}).items():
            self.set_source_tree_root(key, root)
        self._objects: list[ProjectObject] = []
        self.main_group: Group = self.new(Group)

    def __repr__(self) -> str:
        return f"Project({str(self.project_dir)!r}, objects={len(self._objects)})"

    def __iter__(self) -> Iterator[ProjectObject]:
        """Iterate over the registered objects in creation order."""
        return iter(list(self._objects))

    @property
    def objects(self) -> list[ProjectObject]:
        """Snapshot of the registered objects in creation order."""
        return list(self._objects)

    # ==================== Objects ====================

    def new(self, kind: type[T]) -> T:
        """Create and register an object of the given kind."""
        obj = kind(project=self)
        self._objects.append(obj)
        logger.debug("Registered new %s", kind.isa)
        return obj

    def remove_object(self, obj: ProjectObject) -> None:
        """Unregister obj. Unknown objects are ignored."""
        for i, candidate in enumerate(self._objects):
            if candidate is obj:
                del self._objects[i]
                obj.project = None
                logger.debug("Removed %r from project", obj)
                return

    def objects_by_isa(self, isa: str) -> list[ProjectObject]:
        """Return the registered objects of the given kind."""
        return [obj for obj in self._objects if obj.isa == isa]

    # ==================== Source Tree Roots ====================

    def set_source_tree_root(self, source_tree: str, root: str | Path) -> None:
        """Map a build time source tree to a real directory."""
        value = PathResolver.normalize_source_tree(source_tree)
        self._source_tree_roots[value] = Path(root)

    def root_for(self, source_tree: str) -> Path:
        """Return the directory for a build time source tree.

        Returns:
            The configured directory, or the '${KEY}' placeholder.
        """
        value = PathResolver.normalize_source_tree(source_tree)
        if value in self._source_tree_roots:
            return self._source_tree_roots[value]
        return Path(f"${{{value}}}")
