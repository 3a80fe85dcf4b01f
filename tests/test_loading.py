# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for loading trees from plain data and files."""

import json

import pytest

from genro_treeselect import (
    InvalidSourceError,
    TreeNode,
    TreeSelection,
    load_tree,
    load_tree_file,
)

PERMISSIONS = [
    {
        'id': 'users',
        'label': 'Users',
        'children': [
            {'id': 'users.read', 'label': 'Read'},
            {'id': 'users.write', 'label': 'Write', 'disabled': True},
        ],
    },
    {'id': 'reports', 'label': 'Reports', 'metadata': {'module': 'bi'}},
]

PERMISSIONS_YAML = """\
- id: users
  label: Users
  children:
    - id: users.read
      label: Read
    - id: users.write
      label: Write
      disabled: true
- id: reports
  label: Reports
  metadata:
    module: bi
"""


class TestLoadTree:
    """Tests for load_tree / load_node."""

    def test_load_list_of_dicts(self):
        """Test building roots from a list of node dicts."""
        roots = load_tree(PERMISSIONS)
        assert [root.id for root in roots] == ['users', 'reports']
        users = roots[0]
        assert users.label == 'Users'
        assert [child.id for child in users.children] == ['users.read', 'users.write']
        assert users.children[1].disabled is True
        assert roots[1].metadata == {'module': 'bi'}

    def test_load_single_dict(self):
        """Test a single dict is one root."""
        roots = load_tree({'id': 'root', 'children': [{'id': 'leaf'}]})
        assert len(roots) == 1
        assert roots[0].children[0].id == 'leaf'

    def test_label_defaults_to_id(self):
        """Test missing label falls back to the id."""
        roots = load_tree([{'id': 'users'}])
        assert roots[0].label == 'users'

    def test_ids_converted_to_str(self):
        """Test numeric ids become strings."""
        roots = load_tree([{'id': 10, 'children': [{'id': 11}]}])
        assert roots[0].id == '10'
        assert roots[0].children[0].id == '11'

    def test_extra_keys_go_to_metadata(self):
        """Test unknown keys are folded into metadata."""
        roots = load_tree([{'id': 'users', 'icon': 'user', 'metadata': {'code': 'USR'}}])
        assert roots[0].metadata == {'code': 'USR', 'icon': 'user'}

    def test_tree_nodes_pass_through(self):
        """Test TreeNode items are kept as they are."""
        node = TreeNode('users')
        roots = load_tree([node, {'id': 'reports'}])
        assert roots[0] is node
        assert roots[1].id == 'reports'

    def test_missing_id_raises(self):
        """Test a node without id raises."""
        with pytest.raises(InvalidSourceError, match="has no 'id'"):
            load_tree([{'label': 'Nameless'}])

    def test_nested_missing_id_reports_path(self):
        """Test error message names the parent path."""
        with pytest.raises(InvalidSourceError, match="at users"):
            load_tree([{'id': 'users', 'children': [{'label': 'x'}]}])

    def test_children_not_list_raises(self):
        """Test non-list children raise."""
        with pytest.raises(InvalidSourceError, match="children of 'users' must be a list"):
            load_tree([{'id': 'users', 'children': 'read'}])

    def test_metadata_not_dict_raises(self):
        """Test non-dict metadata raises."""
        with pytest.raises(InvalidSourceError, match="metadata of 'users' must be a dict"):
            load_tree([{'id': 'users', 'metadata': ['x']}])

    def test_disabled_string_raises(self):
        """Test a quoted boolean is not taken as disabled=True."""
        with pytest.raises(InvalidSourceError, match="disabled of 'users' must be a bool, not str"):
            load_tree([{'id': 'users', 'disabled': 'false'}])

    def test_disabled_null_is_false(self):
        """Test a null disabled flag means enabled."""
        roots = load_tree([{'id': 'users', 'disabled': None}, {'id': 'reports', 'disabled': False}])
        assert roots[0].disabled is False
        assert roots[1].disabled is False

    def test_invalid_source_type_raises(self):
        """Test unsupported source types raise."""
        with pytest.raises(InvalidSourceError, match="must be list, tuple or dict"):
            load_tree('users')

    def test_invalid_node_type_raises(self):
        """Test non-dict node raises."""
        with pytest.raises(InvalidSourceError, match="must be a dict, not str"):
            load_tree(['users'])

    def test_as_dict_reloads(self):
        """Test TreeNode.as_dict output is accepted by load_tree."""
        roots = load_tree(PERMISSIONS)
        reloaded = load_tree([root.as_dict() for root in roots])
        assert [root.as_dict() for root in reloaded] == [root.as_dict() for root in roots]


class TestLoadTreeFile:
    """Tests for load_tree_file."""

    def test_load_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / 'permissions.json'
        path.write_text(json.dumps(PERMISSIONS), encoding='utf-8')
        roots = load_tree_file(path)
        assert [root.id for root in roots] == ['users', 'reports']

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / 'permissions.yaml'
        path.write_text(PERMISSIONS_YAML, encoding='utf-8')
        roots = load_tree_file(str(path))
        assert roots[0].children[1].disabled is True
        assert roots[1].get_meta('module') == 'bi'

    def test_empty_yaml(self, tmp_path):
        """Test an empty YAML file gives no roots."""
        path = tmp_path / 'empty.yml'
        path.write_text('', encoding='utf-8')
        assert load_tree_file(path) == []

    def test_unsupported_suffix_raises(self, tmp_path):
        """Test unknown file types raise."""
        path = tmp_path / 'permissions.xml'
        path.write_text('<tree/>', encoding='utf-8')
        with pytest.raises(InvalidSourceError, match="unsupported tree file type '.xml'"):
            load_tree_file(path)

    def test_invalid_json_raises(self, tmp_path):
        """Test malformed JSON raises InvalidSourceError."""
        path = tmp_path / 'broken.json'
        path.write_text('[{"id": ', encoding='utf-8')
        with pytest.raises(InvalidSourceError, match="invalid JSON"):
            load_tree_file(path)

    def test_undecodable_file_raises(self, tmp_path):
        """Test a file that is not UTF-8 raises InvalidSourceError."""
        path = tmp_path / 'latin.json'
        path.write_bytes(b'[{"id": "\xff\xfe"}]')
        with pytest.raises(InvalidSourceError, match="cannot decode"):
            load_tree_file(path)

    def test_quoted_false_in_yaml_raises(self, tmp_path):
        """Test a YAML string 'false' for disabled is rejected."""
        path = tmp_path / 'quoted.yaml'
        path.write_text("- id: users\n  disabled: 'false'\n", encoding='utf-8')
        with pytest.raises(InvalidSourceError, match="must be a bool"):
            load_tree_file(path)

    def test_invalid_yaml_raises(self, tmp_path):
        """Test malformed YAML raises InvalidSourceError."""
        path = tmp_path / 'broken.yaml'
        path.write_text('- id: [unclosed', encoding='utf-8')
        with pytest.raises(InvalidSourceError, match="invalid YAML"):
            load_tree_file(path)


class TestTreeSelectionFactories:
    """Tests for TreeSelection.from_source / from_file."""

    def test_from_source(self):
        """Test building a TreeSelection from plain data with options."""
        tree = TreeSelection.from_source(PERMISSIONS, initial_selected=['users.read'])
        assert tree.total_count == 4
        assert tree.is_indeterminate('users') is True

    def test_from_file(self, tmp_path):
        """Test building a TreeSelection from a YAML file."""
        path = tmp_path / 'permissions.yml'
        path.write_text(PERMISSIONS_YAML, encoding='utf-8')
        tree = TreeSelection.from_file(path)
        tree.toggle_select('users.write', True)
        assert tree.selected_ids == ['users', 'users.write']
