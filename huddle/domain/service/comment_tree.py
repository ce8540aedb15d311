"""Comment tree reconstruction.

Turns the flat comment list of a post into nested reply threads. Runs on
every live update, so it stays linear in the number of comments.
"""

from collections import defaultdict
from typing import Iterable, Sequence

from huddle.domain.model.comment import Comment, CommentNode
from huddle.domain.value import CommentId


def build_comment_tree(comments: Sequence[Comment]) -> list[CommentNode]:
    """Build the reply hierarchy from a flat comment list.

    Algorithm:
    1. One pass splits top-level comments from replies and indexes replies
       by parent id, preserving input order within each group
    2. An explicit-stack walk from each root attaches children

    Replies whose parent is not in ``comments`` are dropped together with
    their descendants. Comment ids already attached are skipped, so
    duplicate ids and ``parent_comment_id`` cycles cannot loop.

    Args:
        comments: Comments of a single post, oldest first

    Returns:
        Top-level nodes in input order, replies nested in input order
    """
    roots: list[CommentNode] = []
    children: dict[CommentId, list[Comment]] = defaultdict(list)

    for comment in comments:
        if comment.parent_comment_id is None:
            roots.append(CommentNode(comment=comment))
        else:
            children[comment.parent_comment_id].append(comment)

    visited: set[CommentId] = set()
    tree: list[CommentNode] = []

    for root in roots:
        if root.id in visited:
            continue
        visited.add(root.id)
        tree.append(root)

        stack = [root]
        while stack:
            node = stack.pop()
            for child in children.get(node.id, ()):
                if child.id in visited:
                    continue
                visited.add(child.id)
                child_node = CommentNode(comment=child)
                node.replies.append(child_node)
                stack.append(child_node)

    return tree


def count_comments(tree: Iterable[CommentNode]) -> int:
    """Count every node of a comment tree, nested replies included."""
    count = 0
    stack = list(tree)
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.replies)
    return count


def flatten_comment_tree(tree: Iterable[CommentNode]) -> list[Comment]:
    """Flatten a comment tree depth-first (parent before its replies)."""
    flat: list[Comment] = []
    stack = list(reversed(list(tree)))
    while stack:
        node = stack.pop()
        flat.append(node.comment)
        stack.extend(reversed(node.replies))
    return flat
