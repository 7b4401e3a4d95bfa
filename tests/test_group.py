# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for Group, VariantGroup and VersionGroup."""

import pytest

from genro_grouptree import (
    ConsistencyError,
    FileReference,
    Group,
    Project,
    ReferenceProxy,
    VariantGroup,
    VersionGroup,
)


@pytest.fixture
def project():
    return Project('/work/App')


@pytest.fixture
def main(project):
    return project.main_group


class TestDisplayName:
    """Tests for Group.display_name."""

    def test_name_wins_over_path(self):
        """Test that the name is used even when a path is set."""
        group = Group(name='Sources', path='src/Other')
        assert group.display_name == 'Sources'

    def test_basename_of_path(self):
        """Test that the last path component is used without a name."""
        group = Group(path='src/Model')
        assert group.display_name == 'Model'

    def test_basename_of_path_with_trailing_slash(self):
        """Test trailing slashes are ignored."""
        group = Group(path='src/Model/')
        assert group.display_name == 'Model'

    def test_main_group_label(self, main):
        """Test the main group falls back to the fixed label."""
        assert main.display_name == 'Main Group'

    def test_main_group_with_name(self, main):
        """Test an explicit name also applies to the main group."""
        main.name = 'App'
        assert main.display_name == 'App'

    def test_plain_group_without_name_or_path(self, main):
        """Test a group that is not the main group has no display name."""
        group = main.new_group('X')
        group.name = None
        assert group.display_name is None
        assert Group().display_name is None

    def test_specialized_kinds(self):
        """Test variant and version groups share the rule."""
        assert VariantGroup(path='en.lproj/Main.strings').display_name == 'Main.strings'
        assert VersionGroup(name='Model').display_name == 'Model'


class TestQueries:
    """Tests for the kind filters and recursive traversal."""

    def test_filters_match_exact_kind(self, project, main):
        """Test files, groups and version_groups use exact kinds."""
        group = main.new_group('Sources')
        variant = project.new(VariantGroup)
        version = project.new(VersionGroup)
        ref = project.new(FileReference)
        proxy = project.new(ReferenceProxy)
        for child in (variant, version, ref, proxy):
            main.add(child)

        assert main.groups() == [group]
        assert main.files() == [ref]
        assert main.version_groups() == [version]

    def test_version_group_children_not_folded(self, project, main):
        """Test files() does not look inside version groups."""
        version = project.new(VersionGroup)
        main.add(version)
        version.add(project.new(FileReference))
        assert main.files() == []

    def test_recursive_children_groups(self, project, main):
        """Test pre-order traversal over plain groups only."""
        g1 = main.new_group('G1')
        g2 = g1.new_group('G2')
        main.add(project.new(FileReference))
        variant = project.new(VariantGroup)
        variant.name = 'Localizable.strings'
        main.add(variant)
        version = project.new(VersionGroup)
        main.add(version)
        version.new_group('Hidden')

        assert main.recursive_children_groups() == [g1, g2]

    def test_recursive_children_groups_order(self, main):
        """Test pre-order visits a subtree before the next sibling."""
        a = main.new_group('A')
        a1 = a.new_group('A1')
        a2 = a1.new_group('A2')
        b = main.new_group('B')
        assert main.recursive_children_groups() == [a, a1, a2, b]

    def test_iter_recursive_children_groups_is_lazy(self, main):
        """Test the iterator yields one group at a time."""
        g1 = main.new_group('G1')
        g1.new_group('G2')
        it = main.iter_recursive_children_groups()
        assert next(it) is g1

    def test_walk(self, project, main):
        """Test walk yields subpaths of every node."""
        a = main.new_group('A')
        a.new_group('B')
        ref = project.new(FileReference)
        ref.path = 'notes.txt'
        main.add(ref)
        assert [subpath for subpath, _ in main.walk()] == ['A', 'A/B', 'notes.txt']

    def test_iteration(self, main):
        """Test iterating a group yields its children in order."""
        a = main.new_group('A')
        b = main.new_group('B')
        assert list(main) == [a, b]

    def test_children_is_a_snapshot(self, main):
        """Test mutating the returned list does not touch the group."""
        main.new_group('A')
        children = main.children
        children.clear()
        assert len(main.children) == 1


class TestMutation:
    """Tests for add, new_group and removal."""

    def test_add_appends_and_returns_children(self, project, main):
        """Test add returns the updated list."""
        ref = project.new(FileReference)
        result = main.add(ref)
        assert result == [ref]
        assert ref.parent is main

    def test_add_does_not_check_duplicates(self, project, main):
        """Test the same object can be added twice."""
        ref = project.new(FileReference)
        main.add(ref)
        main.add(ref)
        assert main.children == [ref, ref]

    def test_new_group_without_path(self, project, main):
        """Test new_group sets the name and the group source tree."""
        group = main.new_group('Sources')
        assert group.name == 'Sources'
        assert group.path is None
        assert group.source_tree == '<group>'
        assert group.parent is main
        assert group in project.objects
        assert main.children == [group]

    def test_new_group_with_path(self, main):
        """Test new_group stores the path relative to the parent."""
        group = main.new_group('Sources', '/work/App/Sources')
        assert group.path == 'Sources'
        assert group.source_tree == '<group>'

    def test_new_group_with_source_tree(self, main):
        """Test new_group honours the source tree key."""
        group = main.new_group('Shared', '/opt/shared', 'absolute')
        assert group.path == '/opt/shared'
        assert group.source_tree == '<absolute>'

    def test_new_group_on_free_standing_group(self):
        """Test groups outside a project still build children."""
        root = Group(name='root')
        child = root.new_group('child')
        assert child.project is None
        assert root.children == [child]

    def test_remove_children_recursively(self, project, main):
        """Test the whole subtree leaves the group and the project."""
        a = main.new_group('A')
        b = a.new_group('B')
        b.add(project.new(FileReference))
        main.new_group('C')
        version = project.new(VersionGroup)
        main.add(version)
        version.add(project.new(FileReference))

        main.remove_children_recursively()

        assert main.children == []
        assert project.objects == [main]
        assert a.parent is None

    def test_remove_children_recursively_with_duplicates(self, project, main):
        """Test an object added twice leaves no copy behind."""
        ref = project.new(FileReference)
        main.add(ref)
        main.add(ref)
        main.remove_children_recursively()
        assert main.children == []
        assert ref.parent is None
        assert ref not in project.objects

    def test_remove_children_recursively_with_shared_child(self, project, main):
        """Test a child also added to another group leaves both groups."""
        a = main.new_group('A')
        b = main.new_group('B')
        ref = project.new(FileReference)
        a.add(ref)
        b.add(ref)
        a.remove_children_recursively()
        assert a.children == []
        assert b.children == []
        assert ref not in project.objects

    def test_remove_child_drops_every_occurrence(self, project, main):
        """Test removing a duplicated child removes all its entries."""
        a = main.new_group('A')
        ref = project.new(FileReference)
        main.add(ref)
        main.add(ref)
        ref.remove_from_project()
        assert main.children == [a]

    def test_new_group_rolled_back_on_unresolved_path(self):
        """Test a group whose path cannot be resolved is not kept."""
        root = Group(name='root', path='Sources')
        with pytest.raises(ConsistencyError):
            root.new_group('child', '/work/App/Sources/child')
        assert root.children == []

    def test_remove_children_recursively_on_empty_group(self, project, main):
        """Test removal on an empty group is a no-op."""
        main.remove_children_recursively()
        assert main.children == []
        assert project.objects == [main]

    def test_remove_from_project(self, project, main):
        """Test a removed group takes its subtree with it."""
        a = main.new_group('A')
        b = main.new_group('B')
        a.new_group('A1')
        a.remove_from_project()
        assert main.children == [b]
        assert project.objects == [main, b]


class TestSortByType:
    """Tests for sort_by_type."""

    def test_groups_first_then_names(self):
        """Test the documented ordering example."""
        root = Group(name='root')
        file_a = FileReference(name='FileA')
        group_b = Group(name='GroupB')
        file_c = FileReference(name='FileC')
        group_a = Group(name='GroupA')
        for child in (file_a, group_b, file_c, group_a):
            root.add(child)

        root.sort_by_type()

        assert root.children == [group_a, group_b, file_a, file_c]

    def test_specialized_groups_sort_as_groups(self):
        """Test variant groups come before file references."""
        root = Group(name='root')
        ref = FileReference(path='AppDelegate.swift')
        variant = VariantGroup(name='Main.storyboard')
        root.add(ref)
        root.add(variant)
        root.sort_by_type()
        assert root.children == [variant, ref]

    def test_names_are_case_sensitive(self):
        """Test upper case names sort before lower case ones."""
        root = Group(name='root')
        lower = Group(name='alpha')
        upper = Group(name='Beta')
        root.add(lower)
        root.add(upper)
        root.sort_by_type()
        assert root.children == [upper, lower]

    def test_sort_is_stable(self):
        """Test equal names keep their relative order."""
        root = Group(name='root')
        first = FileReference(name='same')
        second = FileReference(name='same')
        root.add(first)
        root.add(second)
        root.sort_by_type()
        assert root.children[0] is first
        assert root.children[1] is second

    def test_sort_recursively(self, main):
        """Test nested groups are sorted too."""
        outer = main.new_group('Outer')
        z = outer.new_group('Z')
        a = outer.new_group('A')
        main.sort_recursively_by_type()
        assert outer.children == [a, z]


class TestFindSubpath:
    """Tests for find_subpath and the indexed lookup."""

    def test_none_returns_self(self, main):
        """Test a None path returns the group itself."""
        assert main.find_subpath(None) is main
        assert main.find_subpath(None, True) is main

    def test_create_nested(self, main):
        """Test missing groups are created along the path."""
        b = main.find_subpath('A/B', should_create=True)
        assert b.name == 'B'
        assert [g.name for g in main.groups()] == ['A']
        a = main.groups()[0]
        assert a.groups() == [b]

    def test_create_is_idempotent(self, main):
        """Test a second lookup returns the same group without duplicates."""
        b = main.find_subpath('A/B', should_create=True)
        again = main.find_subpath('A/B', should_create=True)
        assert again is b
        assert len(main.children) == 1
        assert len(main.children[0].children) == 1

    def test_missing_without_create(self, main):
        """Test a missing segment returns None and adds nothing."""
        existing = main.new_group('Y')
        assert main.find_subpath('X') is None
        assert main.find_subpath('X/Y/Z') is None
        assert main.children == [existing]

    def test_missing_nested_segment(self, main):
        """Test lookup stops at the first missing segment."""
        main.new_group('A')
        assert main.find_subpath('A/B/C') is None
        assert main['A'].children == []

    def test_matches_display_name(self, main):
        """Test groups named only by path are found by their basename."""
        group = main.new_group('ignored', '/work/App/Sources')
        group.name = None
        assert main['Sources'] is group

    def test_first_match_wins(self, main):
        """Test the first child in order is returned on duplicates."""
        first = main.new_group('Dup')
        main.new_group('Dup')
        assert main['Dup'] is first

    def test_case_sensitive(self, main):
        """Test matching is case sensitive."""
        main.new_group('Sources')
        assert main['sources'] is None

    def test_sequence_path(self, main):
        """Test a pre-split path is accepted and left untouched."""
        segments = ['A', 'B']
        b = main.find_subpath(segments, should_create=True)
        assert segments == ['A', 'B']
        assert main['A/B'] is b

    def test_empty_segments_skipped(self, main):
        """Test leading, trailing and doubled slashes are ignored."""
        b = main.find_subpath('A/B', should_create=True)
        assert main['/A//B/'] is b
        assert main.find_subpath('') is main

    def test_returns_matching_leaf(self, project, main):
        """Test the last segment may name a file reference."""
        ref = project.new(FileReference)
        ref.path = 'Info.plist'
        main.add(ref)
        assert main['Info.plist'] is ref

    def test_cannot_descend_into_leaf(self, project, main):
        """Test a file reference in the middle of the path ends the lookup."""
        ref = project.new(FileReference)
        ref.path = 'Info.plist'
        main.add(ref)
        assert main.find_subpath('Info.plist/Other', should_create=True) is None

    def test_created_groups_in_specialized_group(self, project, main):
        """Test specialized groups support lookup and creation."""
        variant = project.new(VariantGroup)
        variant.name = 'Main.strings'
        main.add(variant)
        created = main.find_subpath('Main.strings/en', should_create=True)
        assert created.parent is variant
        assert type(created) is Group


class TestVersionGroup:
    """Tests for the VersionGroup specialization."""

    def test_defaults(self):
        """Test the default version group type."""
        group = VersionGroup()
        assert group.version_group_type == 'wrapper.xcdatamodel'
        assert group.current_version is None
        assert group.isa == 'XCVersionGroup'

    def test_current_version_points_to_child(self, project):
        """Test the current version is one of the children by convention."""
        group = project.new(VersionGroup)
        ref = project.new(FileReference)
        group.add(ref)
        group.current_version = ref
        assert group.current_version in group.children

    def test_current_version_not_validated(self, project):
        """Test setting a foreign reference is accepted."""
        group = project.new(VersionGroup)
        outsider = project.new(FileReference)
        group.current_version = outsider
        assert group.current_version is outsider

    def test_removing_current_version_clears_it(self, project):
        """Test removing the referenced child clears the relation."""
        group = project.new(VersionGroup)
        v1 = project.new(FileReference)
        v2 = project.new(FileReference)
        group.add(v1)
        group.add(v2)
        group.current_version = v2
        v1.remove_from_project()
        assert group.current_version is v2
        v2.remove_from_project()
        assert group.current_version is None

    def test_remove_children_recursively_clears_current_version(self, project):
        """Test emptying a version group drops its current version."""
        group = project.new(VersionGroup)
        ref = project.new(FileReference)
        group.add(ref)
        group.current_version = ref
        group.remove_children_recursively()
        assert group.children == []
        assert group.current_version is None

    def test_variant_group_file_type(self):
        """Test VariantGroup carries the last known file type."""
        group = VariantGroup(name='Main.storyboard', last_known_file_type='file.storyboard')
        assert group.last_known_file_type == 'file.storyboard'
        assert group.isa == 'PBXVariantGroup'


class TestNavigation:
    """Tests for parent, parents, hierarchy_path and move."""

    def test_parent(self, project, main):
        """Test parents of the main group, a child and a detached group."""
        child = main.new_group('A')
        assert main.parent is project
        assert child.parent is main
        assert Group().parent is None

    def test_parents(self, main):
        """Test ancestors are listed outermost first."""
        a = main.new_group('A')
        b = a.new_group('B')
        assert b.parents() == [main, a]
        assert main.parents() == []

    def test_hierarchy_path(self, main):
        """Test the hierarchy path joins display names."""
        b = main.find_subpath('A/B', should_create=True)
        assert b.hierarchy_path == '/A/B'
        assert main.hierarchy_path is None

    def test_hierarchy_path_without_display_name(self, project, main):
        """Test a nameless object gives an empty last segment."""
        a = main.new_group('A')
        ref = project.new(FileReference)
        a.add(ref)
        assert ref.hierarchy_path == '/A/'

    def test_hierarchy_path_detached(self):
        """Test a detached object has no hierarchy path."""
        with pytest.raises(ConsistencyError):
            _ = Group(name='lost').hierarchy_path

    def test_move(self, project, main):
        """Test moving a reference between groups."""
        a = main.new_group('A')
        b = main.new_group('B')
        ref = project.new(FileReference)
        a.add(ref)
        ref.move(b)
        assert a.children == []
        assert b.children == [ref]
        assert ref.parent is b

    def test_move_into_own_subtree(self, main):
        """Test a group cannot move below itself."""
        a = main.new_group('A')
        inner = a.find_subpath('B/C', should_create=True)
        with pytest.raises(ConsistencyError):
            a.move(inner)
        with pytest.raises(ConsistencyError):
            a.move(a)

    def test_move_main_group(self, main):
        """Test the main group cannot be moved."""
        other = main.new_group('A')
        with pytest.raises(ConsistencyError):
            main.move(other)
