# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ReferenceFactory - Creation of leaf references in a group.

The factory decides which kind of object represents a path:

    - '.xcdatamodeld' bundles become a VersionGroup holding one file
      reference per '.xcdatamodel' version found on disk
    - anything else becomes a FileReference typed from its extension

Example:
    >>> project = Project('/work/App')
    >>> ref = ReferenceFactory.new_reference(
    ...     project.main_group, '/work/App/Sources/main.swift', 'group')
    >>> ref.path, ref.name, ref.last_known_file_type
    ('Sources/main.swift', 'main.swift', 'sourcecode.swift')
"""

from __future__ import annotations

import logging
import plistlib
from pathlib import Path, PurePosixPath

from .constants import DEFAULT_VERSION_GROUP_TYPE, PRODUCT_UTI_EXTENSIONS
from .group import Group, VersionGroup
from .node import FileReference

logger = logging.getLogger(__name__)

CURRENT_VERSION_FILENAME = '.xccurrentversion'
CURRENT_VERSION_KEY = '_XCCurrentVersionName'


class ReferenceFactory:
    """Builds file references and version groups inside a group."""

    @staticmethod
    def new_reference(
        group: Group, path: str | Path, source_tree: str = 'group'
    ) -> FileReference | VersionGroup:
        """Create the reference for path and append it to group.

        Args:
            group: The group receiving the reference.
            path: The path of the reference, preferably absolute.
            source_tree: Source tree key or value used to store the path.

        Returns:
            A VersionGroup for '.xcdatamodeld' paths, a FileReference otherwise.
        """
        extension = PurePosixPath(str(path)).suffix.lower()
        if extension == '.xcdatamodeld':
            ref = ReferenceFactory.new_xcdatamodeld(group, path, source_tree)
        else:
            ref = ReferenceFactory.new_file_reference(group, path, source_tree)
        ReferenceFactory._configure_defaults(ref)
        logger.debug("Created %s for %s in %r", ref.isa, path, group)
        return ref

    @staticmethod
    def new_file_reference(
        group: Group, path: str | Path, source_tree: str = 'group'
    ) -> FileReference:
        """Create a file reference typed from the extension of path."""
        ref = group._new_child(FileReference, path, source_tree)
        ref.set_last_known_file_type()
        return ref

    @staticmethod
    def new_xcdatamodeld(
        group: Group, path: str | Path, source_tree: str = 'group'
    ) -> VersionGroup:
        """Create a version group for a Core Data model bundle.

        When the bundle exists on disk, each '.xcdatamodel' entry becomes a
        child reference and the version named in '.xccurrentversion'
        becomes the current version.
        """
        path = Path(path)
        ref = group._new_child(VersionGroup, path, source_tree)
        ref.version_group_type = DEFAULT_VERSION_GROUP_TYPE

        if not path.is_dir():
            return ref

        current_version_name = None
        for child_path in sorted(path.iterdir()):
            if child_path.suffix == '.xcdatamodel':
                ReferenceFactory.new_file_reference(ref, child_path.name, 'group')
            elif child_path.name == CURRENT_VERSION_FILENAME:
                with child_path.open('rb') as fp:
                    current_version_name = plistlib.load(fp).get(CURRENT_VERSION_KEY)

        if current_version_name:
            ref.current_version = next(
                (
                    child for child in ref.files()
                    if PurePosixPath(child.path).name == current_version_name
                ),
                None,
            )
        return ref

    @staticmethod
    def new_product_ref_for_target(
        group: Group, target_name: str, product_type: str
    ) -> FileReference:
        """Create the reference to the build product of a target.

        Args:
            group: The group receiving the reference (usually 'Products').
            target_name: Name of the target.
            product_type: Key of PRODUCT_UTI_EXTENSIONS, for example
                'static_library' or 'framework'.

        Example:
            >>> ref = ReferenceFactory.new_product_ref_for_target(products, 'Core', 'framework')
            >>> ref.path, ref.explicit_file_type
            ('Core.framework', 'wrapper.framework')
        """
        prefix = 'lib' if product_type == 'static_library' else ''
        extension = PRODUCT_UTI_EXTENSIONS.get(product_type)
        path = f"{prefix}{target_name}"
        if extension:
            path += f".{extension}"
        ref = ReferenceFactory.new_reference(group, path, 'built_products_dir')
        ref.include_in_index = '0'
        ref.set_explicit_file_type()
        return ref

    @staticmethod
    def new_static_library(group: Group, product_name: str) -> FileReference:
        """Create the reference to 'lib<product_name>.a'."""
        return ReferenceFactory.new_product_ref_for_target(
            group, product_name, 'static_library'
        )

    @staticmethod
    def new_bundle(group: Group, product_name: str) -> FileReference:
        """Create the reference to '<product_name>.bundle'."""
        ref = ReferenceFactory.new_reference(
            group, f"{product_name}.bundle", 'built_products_dir'
        )
        ref.include_in_index = '0'
        ref.set_explicit_file_type('wrapper.cfbundle')
        return ref

    @staticmethod
    def _configure_defaults(ref: FileReference | VersionGroup) -> None:
        """Name references stored with a nested path, unindex frameworks."""
        if ref.path and '/' in ref.path:
            ref.name = PurePosixPath(ref.path).name
        if isinstance(ref, FileReference):
            if PurePosixPath(ref.path or '').suffix.lower() == '.framework':
                ref.include_in_index = None
