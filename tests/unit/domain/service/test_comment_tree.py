"""Unit tests for comment tree reconstruction."""

from uuid import uuid4

from huddle.domain.service import (
    build_comment_tree,
    count_comments,
    flatten_comment_tree,
)
from huddle.domain.value import CommentId, PostId
from tests.conftest import make_comment


def _ids(nodes):
    return [node.id for node in nodes]


class TestBuildCommentTree:
    """Tests for build_comment_tree."""

    def test_empty_list_builds_empty_tree(self):
        """No comments, no nodes."""
        assert build_comment_tree([]) == []

    def test_nests_replies_under_parents_in_input_order(self):
        """Roots and siblings keep the order of the flat list."""
        # Arrange
        post_id = PostId(uuid4())
        first = make_comment(post_id)
        second = make_comment(post_id)
        reply_a = make_comment(post_id, parent=first)
        reply_b = make_comment(post_id, parent=first)
        nested = make_comment(post_id, parent=reply_a)

        # Act
        tree = build_comment_tree([first, second, reply_a, reply_b, nested])

        # Assert
        assert _ids(tree) == [first.id, second.id]
        assert _ids(tree[0].replies) == [reply_a.id, reply_b.id]
        assert _ids(tree[0].replies[0].replies) == [nested.id]
        assert tree[1].replies == []

    def test_reply_listed_before_parent_is_still_attached(self):
        """Attachment does not depend on the parent coming first."""
        post_id = PostId(uuid4())
        parent = make_comment(post_id)
        reply = make_comment(post_id, parent=parent)

        tree = build_comment_tree([reply, parent])

        assert _ids(tree) == [parent.id]
        assert _ids(tree[0].replies) == [reply.id]

    def test_orphans_and_their_descendants_are_dropped(self):
        """Replies to a missing parent vanish along with their subtree."""
        # Arrange
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        orphan = make_comment(post_id, parent_comment_id=CommentId(uuid4()))
        orphan_child = make_comment(post_id, parent=orphan)
        comments = [root, orphan, orphan_child]

        # Act
        tree = build_comment_tree(comments)

        # Assert
        assert _ids(tree) == [root.id]
        dropped = len(comments) - count_comments(tree)
        assert dropped == 2

    def test_parent_cycle_terminates_and_is_dropped(self):
        """Comments replying to each other never reach a root."""
        post_id = PostId(uuid4())
        a_id, b_id = CommentId(uuid4()), CommentId(uuid4())
        a = make_comment(post_id, id=a_id, parent_comment_id=b_id)
        b = make_comment(post_id, id=b_id, parent_comment_id=a_id)
        root = make_comment(post_id)

        tree = build_comment_tree([a, b, root])

        assert _ids(tree) == [root.id]
        assert count_comments(tree) == 1

    def test_duplicate_ids_are_attached_once(self):
        """A repeated comment id appears a single time in the tree."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        reply = make_comment(post_id, parent=root)

        tree = build_comment_tree([root, reply, reply, root])

        assert count_comments(tree) == 2
        assert _ids(tree) == [root.id]

    def test_deep_chain_does_not_recurse(self):
        """Thousands of nesting levels build without recursion limits."""
        post_id = PostId(uuid4())
        chain = [make_comment(post_id)]
        for _ in range(5000):
            chain.append(make_comment(post_id, parent=chain[-1]))

        tree = build_comment_tree(chain)

        assert count_comments(tree) == len(chain)

    def test_rebuilding_from_flattened_tree_is_stable(self):
        """flatten then rebuild gives the same structure."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        other = make_comment(post_id)
        reply = make_comment(post_id, parent=root)
        nested = make_comment(post_id, parent=reply)
        tree = build_comment_tree([root, other, reply, nested])

        flat = flatten_comment_tree(tree)
        rebuilt = build_comment_tree(flat)

        assert [c.id for c in flat] == [root.id, reply.id, nested.id, other.id]
        assert flatten_comment_tree(rebuilt) == flat


class TestCountComments:
    """Tests for count_comments."""

    def test_counts_nested_replies(self):
        """Every node is counted, at any depth."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        reply = make_comment(post_id, parent=root)
        nested = make_comment(post_id, parent=reply)

        assert count_comments(build_comment_tree([root, reply, nested])) == 3

    def test_empty_tree_counts_zero(self):
        """Empty tree has no comments."""
        assert count_comments([]) == 0
