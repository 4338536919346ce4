"""Segment-level prefix tree built from a dictionary of path-like identifiers.

Every node is labelled by one segment.  Identifiers sharing leading segments
share the corresponding chain of nodes, which lets the checker score a common
prefix once for every entry below it.

The tree is populated exclusively through :meth:`PrefixTree.build`.  Once
built, the children of every node are reordered lexicographically so that
traversal order (and therefore tie-breaking between equally ranked
suggestions) does not depend on the order of the input dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import ConfigurationError
from .tokenizer import DEFAULT_DELIMITER, DictionaryEntry, tokenize, validate_delimiter

__all__ = [
    "PrefixTree",
    "TreeNode",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TreeNode:
    """A node inside the prefix tree."""

    label: str = ""
    children: Dict[str, "TreeNode"] = field(default_factory=dict)
    is_terminal: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.label, str):
            raise TypeError("TreeNode.label must be a string")
        for key, child in self.children.items():
            if not isinstance(child, TreeNode):
                raise TypeError("TreeNode children must be TreeNode instances")
            if key != child.label:
                raise TypeError("TreeNode children must be keyed by their label")

    def child(self, label: str) -> Optional["TreeNode"]:
        return self.children.get(label)

    def iter_children(self) -> Iterator["TreeNode"]:
        """Yield children in the tree's fixed order."""

        return iter(self.children.values())


class PrefixTree:
    """Immutable prefix tree keyed by identifier segments."""

    __slots__ = ("root", "delimiter", "_size", "_node_count", "_depth")

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.root = TreeNode()
        self.delimiter = validate_delimiter(delimiter)
        self._size = 0
        self._node_count = 1
        self._depth = 0

    @classmethod
    def build(
        cls, dictionary: Iterable[str], delimiter: str = DEFAULT_DELIMITER
    ) -> "PrefixTree":
        """Build a tree holding every identifier in *dictionary*.

        Raises
        ------
        ConfigurationError
            If the dictionary is empty, is itself a string, or contains an
            entry that is not a non-empty string.
        """

        if dictionary is None or isinstance(dictionary, (str, bytes)):
            raise ConfigurationError("dictionary must be a sequence of strings")
        entries = [DictionaryEntry.from_string(item, delimiter) for item in dictionary]
        if not entries:
            raise ConfigurationError("dictionary must contain at least one entry")

        tree = cls(delimiter)
        for entry in entries:
            tree._insert(entry.segments)
        _sort_children(tree.root)
        logger.debug(
            "Built prefix tree: %d entries, %d nodes, depth %d",
            tree._size,
            tree._node_count,
            tree._depth,
        )
        return tree

    @classmethod
    def empty(cls, delimiter: str = DEFAULT_DELIMITER) -> "PrefixTree":
        """Return a tree without entries."""

        return cls(delimiter)

    def _insert(self, segments: Tuple[str, ...]) -> None:
        node = self.root
        for segment in segments:
            next_node = node.children.get(segment)
            if next_node is None:
                next_node = TreeNode(label=segment)
                node.children[segment] = next_node
                self._node_count += 1
            node = next_node
        if not node.is_terminal:
            node.is_terminal = True
            self._size += 1
            self._depth = max(self._depth, len(segments))

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        node: Optional[TreeNode] = self.root
        for segment in tokenize(identifier, self.delimiter):
            node = node.child(segment)
            if node is None:
                return False
        return node.is_terminal

    def __len__(self) -> int:
        return self._size

    @property
    def node_count(self) -> int:
        """Total number of nodes, root included."""

        return self._node_count

    @property
    def depth(self) -> int:
        """Number of segments in the longest entry."""

        return self._depth

    def iter_entries(self) -> Iterator[str]:
        """Yield every stored identifier in lexicographic segment order."""

        def _walk(node: TreeNode, prefix: List[str]) -> Iterator[str]:
            if node.is_terminal:
                yield self.delimiter.join(prefix)
            for child in node.iter_children():
                prefix.append(child.label)
                yield from _walk(child, prefix)
                prefix.pop()

        yield from _walk(self.root, [])


def _sort_children(node: TreeNode) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        current.children = {
            label: current.children[label] for label in sorted(current.children)
        }
        stack.extend(current.children.values())
