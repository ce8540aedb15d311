"""Thread snapshot delivered to subscribers."""

from dataclasses import dataclass

from huddle.domain.model.comment import CommentNode
from huddle.domain.value import PostId


@dataclass(frozen=True)
class ThreadSnapshot:
    """Comment tree of a post rebuilt from one consistent store snapshot.

    ``total_count`` counts every node of the tree, nested replies included.
    Orphaned replies dropped from the tree are not counted.
    """

    post_id: PostId
    tree: list[CommentNode]
    total_count: int
