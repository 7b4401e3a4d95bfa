# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Project layout - Example building the group tree of an app project.

A didactic example showing subpath creation, folder linked groups,
product references and type ordering.
"""

from __future__ import annotations

from genro_grouptree import Project


def build_layout(project_dir: str = '/work/App') -> Project:
    """Build a typical layout and return the project.

    Example:
        >>> project = build_layout()
        >>> for subpath, node in project.main_group.walk():
        ...     print(subpath, node.isa)
    """
    project = Project(project_dir)
    main = project.main_group

    sources = main.new_group('Sources', f'{project_dir}/Sources')
    sources.new_reference(f'{project_dir}/Sources/AppDelegate.swift')
    sources.new_reference(f'{project_dir}/Sources/Info.plist')

    model = main.find_subpath('Sources/Model', should_create=True)
    model.new_reference(f'{project_dir}/Sources/User.swift')

    frameworks = main.find_subpath('Frameworks', should_create=True)
    frameworks.new_reference('System/Library/Frameworks/UIKit.framework', 'sdk_root')

    products = main.new_group('Products')
    products.new_product_ref_for_target('App', 'application')
    products.new_static_library('Core')

    main.sort_recursively_by_type()
    return project


if __name__ == '__main__':
    for subpath, node in build_layout().main_group.walk():
        print(f"{subpath:50} {node.isa}")
