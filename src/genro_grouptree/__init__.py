# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-GroupTree - The group tree of Xcode project documents.

A lightweight, zero-dependency library modelling groups, variant groups,
version groups and file references, with subpath lookup, type ordering
and source tree path resolution.
"""

__version__ = "0.1.0"

from .exceptions import (
    ConsistencyError,
    GroupTreeError,
    PathResolutionError,
    UnknownSourceTreeError,
)
from .group import Group, VariantGroup, VersionGroup
from .node import FileReference, ProjectObject, ReferenceProxy
from .paths import PathResolver, relative_path_from
from .project import Project
from .references import ReferenceFactory

__all__ = [
    # Tree
    "Project",
    "ProjectObject",
    "Group",
    "VariantGroup",
    "VersionGroup",
    "FileReference",
    "ReferenceProxy",
    # Collaborators
    "PathResolver",
    "ReferenceFactory",
    "relative_path_from",
    # Exceptions
    "GroupTreeError",
    "UnknownSourceTreeError",
    "ConsistencyError",
    "PathResolutionError",
]
