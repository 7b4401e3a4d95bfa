# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Group - Container nodes of the project group tree.

This module provides the Group class and its two specializations:

- **Group**: a container of groups, file references and reference proxies
- **VariantGroup**: gathers the localized variants of one resource
- **VersionGroup**: holds the on-disk versions of one resource (for
  example the models of a ``.xcdatamodeld`` bundle) and designates the
  current one

Subpath Syntax:
    A subpath is a '/' separated sequence of display names, matched
    against the direct children of each group in turn:
    - 'Sources': the child whose display name is 'Sources'
    - 'Sources/Model': the 'Model' child of 'Sources'

Example:
    Basic usage::

        project = Project('/work/App')
        main = project.main_group
        model = main.find_subpath('Sources/Model', should_create=True)
        model.new_reference('/work/App/Sources/Model/User.swift')

        main['Sources/Model'] is model  # True
        main.sort_by_type()
"""

from __future__ import annotations

from functools import cmp_to_key
from pathlib import Path, PurePosixPath
from typing import Iterator, Sequence, TYPE_CHECKING

from .constants import DEFAULT_VERSION_GROUP_TYPE, GROUP, MAIN_GROUP_DISPLAY_NAME
from .exceptions import GroupTreeError
from .node import FileReference, ProjectObject
from .paths import PathResolver

if TYPE_CHECKING:
    from .project import Project


def _compare_by_type(x: ProjectObject, y: ProjectObject) -> int:
    """Groups before file references, then display names."""
    if isinstance(x, Group) and isinstance(y, FileReference):
        return -1
    if isinstance(x, FileReference) and isinstance(y, Group):
        return 1
    x_name = x.display_name or ''
    y_name = y.display_name or ''
    return (x_name > y_name) - (x_name < y_name)


class Group(ProjectObject):
    """A node of the group tree containing other nodes.

    Groups own their children: every change to the children list goes
    through the group, which keeps the parent reference of each child in
    step with the list. The ``children`` property returns a snapshot.

    Attributes:
        name: Explicit name, shown instead of the path when set.
        path: Folder path relative to the source tree root, for groups
            linked to a folder.
        source_tree: Stored source tree value ('<group>' by default).
        uses_tabs, indent_width, tab_width, wraps_lines, comments:
            Editor presentation values, stored as given.

    Example:
        >>> project = Project('/work/App')
        >>> sources = project.main_group.new_group('Sources', 'Sources')
        >>> sources.path
        'Sources'
        >>> sources.real_path
        PosixPath('/work/App/Sources')
    """

    isa = 'PBXGroup'

    __slots__ = (
        '_children', 'uses_tabs', 'indent_width', 'tab_width',
        'wraps_lines', 'comments',
    )

    def __init__(
        self,
        name: str | None = None,
        path: str | None = None,
        source_tree: str = GROUP,
        project: Project | None = None,
        uses_tabs: str | None = None,
        indent_width: str | None = None,
        tab_width: str | None = None,
        wraps_lines: str | None = None,
        comments: str | None = None,
    ) -> None:
        """Initialize a Group.

        Args:
            name: Optional explicit name.
            path: Optional folder path relative to the source tree root.
            source_tree: Stored source tree value.
            project: The Project owning this group.
            uses_tabs: Whether the editor uses tabs ('1' or '0').
            indent_width: Indent width.
            tab_width: Tab width.
            wraps_lines: Whether the editor wraps lines ('1' or '0').
            comments: Free text comments.
        """
        super().__init__(name, path, source_tree, project)
        self._children: list[ProjectObject] = []
        self.uses_tabs = uses_tabs
        self.indent_width = indent_width
        self.tab_width = tab_width
        self.wraps_lines = wraps_lines
        self.comments = comments

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.display_name!r}, "
            f"children={len(self._children)})"
        )

    def __iter__(self) -> Iterator[ProjectObject]:
        """Iterate over direct children in order."""
        return iter(list(self._children))

    def __getitem__(self, path: str | Sequence[str]) -> Group | None:
        """Find the group at the given subpath, without creating it.

        Example:
            >>> main['Frameworks'].name
            'Frameworks'
        """
        return self.find_subpath(path, False)

    # ==================== Basic Queries ====================

    @property
    def display_name(self) -> str | None:
        """The name, the last component of the path, or the main group label."""
        if self.name is not None:
            return self.name
        if self.path is not None:
            return PurePosixPath(self.path).name
        if self.is_main_group:
            return MAIN_GROUP_DISPLAY_NAME
        return None

    @property
    def is_main_group(self) -> bool:
        """True if this group is the root group of its project."""
        return self.project is not None and self is self.project.main_group

    @property
    def children(self) -> list[ProjectObject]:
        """Snapshot of the children in order."""
        return list(self._children)

    def files(self) -> list[FileReference]:
        """Return the file references among the children."""
        return [c for c in self._children if c.isa == FileReference.isa]

    def groups(self) -> list[Group]:
        """Return the plain groups among the children.

        Variant and version groups are not included.
        """
        return [c for c in self._children if c.isa == Group.isa]

    def version_groups(self) -> list[VersionGroup]:
        """Return the version groups among the children."""
        return [c for c in self._children if c.isa == VersionGroup.isa]

    def iter_recursive_children_groups(self) -> Iterator[Group]:
        """Yield the plain groups of the subtree in pre-order."""
        for group in self.groups():
            yield group
            yield from group.iter_recursive_children_groups()

    def recursive_children_groups(self) -> list[Group]:
        """Return the plain groups of the subtree in pre-order."""
        return list(self.iter_recursive_children_groups())

    def walk(self) -> Iterator[tuple[str, ProjectObject]]:
        """Walk the subtree, yielding (subpath, node) pairs in pre-order.

        Every group kind is descended into.

        Example:
            >>> for subpath, node in main.walk():
            ...     print(subpath, node.isa)
        """
        return self._walk('')

    def _walk(self, prefix: str) -> Iterator[tuple[str, ProjectObject]]:
        for child in list(self._children):
            name = child.display_name or ''
            subpath = f"{prefix}/{name}" if prefix else name
            yield subpath, child
            if isinstance(child, Group):
                yield from child._walk(subpath)

    # ==================== Children Storage ====================

    def _new_object(self, kind: type[ProjectObject]) -> ProjectObject:
        """Create an object of the given kind in this group's project."""
        if self.project is not None:
            return self.project.new(kind)
        return kind()

    def _insert_child(self, child: ProjectObject) -> None:
        """Append child and record this group as its parent."""
        self._children.append(child)
        child._parent = self

    def _remove_child(self, child: ProjectObject) -> None:
        """Remove every occurrence of child and clear its parent.

        Raises:
            ValueError: If child is not a child of this group.
        """
        remaining = [c for c in self._children if c is not child]
        if len(remaining) == len(self._children):
            raise ValueError(f"{child!r} is not a child of {self!r}")
        self._children = remaining
        if child._parent is self:
            child._parent = None

    def _new_child(
        self, kind: type[ProjectObject], path: str | Path, source_tree: str
    ) -> ProjectObject:
        """Create a child of the given kind pointing to path.

        The child is detached and unregistered again if its path cannot
        be resolved.
        """
        source_tree = PathResolver.normalize_source_tree(source_tree)
        child = self._new_object(kind)
        self._insert_child(child)
        try:
            PathResolver.set_path_with_source_tree(child, path, source_tree)
        except GroupTreeError:
            child.remove_from_project()
            raise
        return child

    # ==================== Mutation ====================

    def add(self, child: ProjectObject) -> list[ProjectObject]:
        """Append child to the children.

        Duplicates and cycles are not checked.

        Returns:
            The updated children list.
        """
        self._insert_child(child)
        return self.children

    def new_group(
        self,
        name: str,
        path: str | Path | None = None,
        source_tree: str = 'group',
    ) -> Group:
        """Create a new group and append it to the children.

        Args:
            name: The name of the new group.
            path: Optional folder path, preferably absolute, the group
                should point to.
            source_tree: Source tree key used to store the path.

        Returns:
            The new group.
        """
        if path is not None:
            group = self._new_child(Group, path, source_tree)
        else:
            PathResolver.normalize_source_tree(source_tree)
            group = self._new_object(Group)
            self._insert_child(group)
            group.source_tree = GROUP
        group.name = name
        return group

    def new_reference(
        self, path: str | Path, source_tree: str = 'group'
    ) -> FileReference | VersionGroup:
        """Create a reference to path and append it to the children.

        The kind of reference depends on the extension of the path:
        ``.xcdatamodeld`` bundles become version groups, anything else a
        file reference.

        Args:
            path: The path of the reference, preferably absolute.
            source_tree: Source tree key used to store the path.

        Returns:
            The new reference.
        """
        from .references import ReferenceFactory
        return ReferenceFactory.new_reference(self, path, source_tree)

    new_file = new_reference

    def new_static_library(self, product_name: str) -> FileReference:
        """Create a reference to the static library of a product."""
        from .references import ReferenceFactory
        return ReferenceFactory.new_static_library(self, product_name)

    def new_bundle(self, product_name: str) -> FileReference:
        """Create a reference to the bundle of a product."""
        from .references import ReferenceFactory
        return ReferenceFactory.new_bundle(self, product_name)

    def new_product_ref_for_target(
        self, target_name: str, product_type: str
    ) -> FileReference:
        """Create a reference to the product of a target."""
        from .references import ReferenceFactory
        return ReferenceFactory.new_product_ref_for_target(
            self, target_name, product_type
        )

    def remove_children_recursively(self) -> None:
        """Remove every child, and the subtree of each child, from the project.

        The children list is emptied even when it holds duplicates or
        children also attached to another group.
        """
        children, self._children = self._children, []
        for child in children:
            if child._parent is self:
                child._parent = None
        for child in children:
            child.remove_from_project()

    def remove_from_project(self) -> None:
        """Remove the subtree, then detach and unregister this group."""
        self.remove_children_recursively()
        super().remove_from_project()

    def sort_by_type(self) -> None:
        """Sort the children, groups first and then by display name.

        The sort is stable. The children list is replaced in one step.
        """
        self._children = sorted(self._children, key=cmp_to_key(_compare_by_type))

    def sort_recursively_by_type(self) -> None:
        """Sort the children of this group and of every group below it."""
        self.sort_by_type()
        for child in self._children:
            if isinstance(child, Group):
                child.sort_recursively_by_type()

    # ==================== Path Lookup ====================

    def find_subpath(
        self,
        path: str | Sequence[str] | None,
        should_create: bool = False,
    ) -> Group | None:
        """Find the group at the given subpath, optionally creating it.

        Segments are matched against the display name of the children,
        first match in order wins. Empty segments are skipped.

        Args:
            path: Names separated by '/', a sequence of names, or None.
            should_create: If True, missing groups are created.

        Returns:
            The group found or created, this group if path is None or
            empty, or None if a segment is missing and should_create is
            False.

        Example:
            >>> g = main.find_subpath('Frameworks', should_create=True)
            >>> g.name
            'Frameworks'
        """
        if path is None:
            return self
        segments = path.split('/') if isinstance(path, str) else list(path)
        segments = [s for s in segments if s]
        if not segments:
            return self

        child_name, remaining = segments[0], segments[1:]
        child = next(
            (c for c in self._children if c.display_name == child_name), None
        )
        if child is None:
            if not should_create:
                return None
            child = self.new_group(child_name)

        if not remaining:
            return child
        if not isinstance(child, Group):
            return None
        return child.find_subpath(remaining, should_create)


class VariantGroup(Group):
    """A group gathering the localized variants of one resource."""

    isa = 'PBXVariantGroup'

    __slots__ = ('last_known_file_type',)

    def __init__(self, *args, last_known_file_type: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.last_known_file_type = last_known_file_type


class VersionGroup(Group):
    """A group holding the versions of one resource.

    Used to contain the different versions of a ``.xcdatamodeld`` bundle.
    ``current_version`` is a plain reference to one of the children; it is
    not checked when set. Removing the referenced child clears it.
    """

    isa = 'XCVersionGroup'

    __slots__ = ('current_version', 'version_group_type')

    def __init__(
        self,
        *args,
        current_version: FileReference | None = None,
        version_group_type: str = DEFAULT_VERSION_GROUP_TYPE,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.current_version = current_version
        self.version_group_type = version_group_type

    def _remove_child(self, child: ProjectObject) -> None:
        super()._remove_child(child)
        if self.current_version is child:
            self.current_version = None

    def remove_children_recursively(self) -> None:
        super().remove_children_recursively()
        self.current_version = None
