from bisect import insort
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterator, List, Optional, Sequence

from huffproc.encoding_schemes.alphabet import ALPH_SIZE, PSEUDO_EOF


@dataclass(eq=False)
class HuffNode:
    """
    Node of a Huffman code tree.

    Leaves carry a symbol `value`; internal nodes have `value=None` and exactly
    two children. `weight` is the leaf frequency or the sum over the subtree.
    """
    weight: int = 0
    value: Optional[int] = None
    left: Optional["HuffNode"] = None
    right: Optional["HuffNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.value is not None


_by_weight = attrgetter("weight")


def _enqueue(node: HuffNode, worklist: List[HuffNode]) -> None:
    # Equal weights go after the entries already queued.
    insort(worklist, node, key=_by_weight)


def build_tree(counts: Sequence[int]) -> HuffNode:
    """
    Build the code tree for a 256-entry frequency table.

    Every non-zero symbol gets a leaf, plus the pseudo-EOF leaf with weight 1.
    The two lightest nodes are merged (first removed becomes the left child)
    until a single root remains.
    """
    if len(counts) != ALPH_SIZE:
        raise ValueError(f"Expected {ALPH_SIZE} counts, got {len(counts)}")

    worklist: List[HuffNode] = []
    for symbol, count in enumerate(counts):
        if count < 0:
            raise ValueError(f"Negative count for symbol {symbol}")
        if count:
            _enqueue(HuffNode(weight=count, value=symbol), worklist)
    _enqueue(HuffNode(weight=1, value=PSEUDO_EOF), worklist)
    if len(worklist) == 1:
        # Empty input: pair pseudo-EOF with a weightless filler so its code is one bit long.
        _enqueue(HuffNode(weight=0, value=0), worklist)

    while len(worklist) > 1:
        left = worklist.pop(0)
        right = worklist.pop(0)
        _enqueue(HuffNode(weight=left.weight + right.weight, left=left, right=right), worklist)

    return worklist[0]


def iter_preorder(root: HuffNode) -> Iterator[HuffNode]:
    """Yield nodes root-first, left subtree before right, without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)
