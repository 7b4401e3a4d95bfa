# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Project object base class and leaf node kinds."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, TYPE_CHECKING

from .constants import FILE_TYPES_BY_EXTENSION, GROUP

if TYPE_CHECKING:
    from .group import Group
    from .project import Project


def _extension(path: str | None) -> str | None:
    """Return the lower case extension of path without the dot, if any."""
    if not path:
        return None
    suffix = PurePosixPath(path).suffix
    return suffix[1:].lower() if suffix else None


class ProjectObject:
    """An object living in the group tree of a Project.

    Each object has:
    - isa: The kind discriminator, fixed per class
    - name: Optional explicit name
    - path: Optional path relative to the source tree root
    - source_tree: The stored source tree value ('<group>' by default)
    - project: The Project the object is registered in

    The containing group is tracked by the group itself when the object is
    added to it; use the ``parent`` property to read it.

    Example:
        >>> ref = FileReference(path='Sources/main.swift')
        >>> ref.display_name
        'main.swift'
    """

    isa: str = 'PBXObject'

    __slots__ = ('name', 'path', 'source_tree', 'project', '_parent')

    def __init__(
        self,
        name: str | None = None,
        path: str | None = None,
        source_tree: str = GROUP,
        project: Project | None = None,
    ) -> None:
        """Initialize a ProjectObject.

        Args:
            name: Optional explicit name.
            path: Optional path relative to the source tree root.
            source_tree: Stored source tree value.
            project: The Project owning this object.
        """
        self.name = name
        self.path = path
        self.source_tree = source_tree
        self.project = project
        self._parent: Group | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.display_name!r})"

    @property
    def display_name(self) -> str | None:
        """The name, or the last component of the path."""
        if self.name is not None:
            return self.name
        if self.path is not None:
            return PurePosixPath(self.path).name
        return None

    # ==================== Navigation ====================

    @property
    def parent(self) -> Group | Project | None:
        """The containing group, the Project for the main group, or None."""
        from .paths import PathResolver
        return PathResolver.parent_of(self)

    def parents(self) -> list[Group]:
        """Return the ancestor groups from the main group down to the parent."""
        from .paths import PathResolver
        return PathResolver.parents_of(self)

    @property
    def hierarchy_path(self) -> str | None:
        """Slash separated display names from the main group to this object."""
        from .paths import PathResolver
        return PathResolver.hierarchy_path_of(self)

    @property
    def real_path(self) -> Path:
        """The absolute path of the object, resolving the source tree."""
        from .paths import PathResolver
        return PathResolver.real_path_of(self)

    def set_source_tree(self, source_tree: str) -> None:
        """Set the source tree from a key ('group') or a value ('<group>')."""
        from .paths import PathResolver
        self.source_tree = PathResolver.normalize_source_tree(source_tree)

    def set_path(self, path: str | Path, source_tree: str = 'group') -> None:
        """Point the object to path, relative to the given source tree."""
        from .paths import PathResolver
        PathResolver.set_path_with_source_tree(self, path, source_tree)

    # ==================== Mutation ====================

    def move(self, new_parent: Group) -> None:
        """Move the object to another group, keeping its path settings."""
        from .paths import PathResolver
        PathResolver.move(self, new_parent)

    def remove_from_project(self) -> None:
        """Detach the object from its group and unregister it."""
        if self._parent is not None:
            self._parent._remove_child(self)
        if self.project is not None:
            self.project.remove_object(self)


class FileReference(ProjectObject):
    """A leaf reference to a file or a bundle on disk.

    Example:
        >>> ref = FileReference(path='Info.plist')
        >>> ref.set_last_known_file_type()
        >>> ref.last_known_file_type
        'text.plist.xml'
    """

    isa = 'PBXFileReference'

    __slots__ = (
        'last_known_file_type', 'explicit_file_type', 'include_in_index',
        'file_encoding', 'uses_tabs', 'indent_width', 'tab_width',
        'wraps_lines', 'comments',
    )

    def __init__(
        self,
        name: str | None = None,
        path: str | None = None,
        source_tree: str = GROUP,
        project: Project | None = None,
        last_known_file_type: str | None = None,
        explicit_file_type: str | None = None,
        include_in_index: str | None = '1',
        file_encoding: str | None = None,
        uses_tabs: str | None = None,
        indent_width: str | None = None,
        tab_width: str | None = None,
        wraps_lines: str | None = None,
        comments: str | None = None,
    ) -> None:
        """Initialize a FileReference.

        Args:
            name: Optional explicit name.
            path: Path relative to the source tree root.
            source_tree: Stored source tree value.
            project: The Project owning this reference.
            last_known_file_type: File type guessed from the extension.
            explicit_file_type: File type set explicitly (products).
            include_in_index: Whether Xcode indexes the file ('1' or '0').
            file_encoding: Text encoding identifier.
            uses_tabs, indent_width, tab_width, wraps_lines, comments:
                Editor presentation values, stored as given.
        """
        super().__init__(name, path, source_tree, project)
        self.last_known_file_type = last_known_file_type
        self.explicit_file_type = explicit_file_type
        self.include_in_index = include_in_index
        self.file_encoding = file_encoding
        self.uses_tabs = uses_tabs
        self.indent_width = indent_width
        self.tab_width = tab_width
        self.wraps_lines = wraps_lines
        self.comments = comments

    def set_last_known_file_type(self, file_type: str | None = None) -> None:
        """Set the last known file type, guessing it from the extension."""
        if file_type:
            self.last_known_file_type = file_type
        elif self.path:
            self.last_known_file_type = FILE_TYPES_BY_EXTENSION.get(
                _extension(self.path) or ''
            )

    def set_explicit_file_type(self, file_type: str | None = None) -> None:
        """Set the explicit file type and drop the last known one."""
        self.last_known_file_type = None
        if file_type:
            self.explicit_file_type = file_type
        elif self.path:
            self.explicit_file_type = FILE_TYPES_BY_EXTENSION.get(
                _extension(self.path) or ''
            )


class ReferenceProxy(ProjectObject):
    """A reference to a product of another project."""

    isa = 'PBXReferenceProxy'

    __slots__ = ('file_type', 'remote_ref')

    def __init__(
        self,
        name: str | None = None,
        path: str | None = None,
        source_tree: str = GROUP,
        project: Project | None = None,
        file_type: str | None = None,
        remote_ref: Any = None,
    ) -> None:
        super().__init__(name, path, source_tree, project)
        self.file_type = file_type
        self.remote_ref = remote_ref
