# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""GroupTree exceptions."""

from __future__ import annotations


class GroupTreeError(Exception):
    """Base exception for GroupTree errors."""

    pass


class UnknownSourceTreeError(GroupTreeError, ValueError):
    """Raised when a source tree key or value is not recognized."""

    pass


class ConsistencyError(GroupTreeError):
    """Raised when the tree structure is inconsistent for the operation."""

    pass


class PathResolutionError(GroupTreeError, ValueError):
    """Raised when a relative path cannot be computed between two paths."""

    pass
