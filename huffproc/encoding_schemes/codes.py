from typing import Dict

from bitarray import bitarray, frozenbitarray

from huffproc.encoding_schemes.tree import HuffNode


def build_code_table(root: HuffNode) -> Dict[int, frozenbitarray]:
    """
    Walk the tree and map every leaf symbol to its path (0 = left, 1 = right).
    """
    codes: Dict[int, frozenbitarray] = {}
    stack = [(root, bitarray(endian="big"))]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            codes[node.value] = frozenbitarray(path)
            continue
        right_path = path.copy()
        right_path.append(1)
        stack.append((node.right, right_path))
        path.append(0)
        stack.append((node.left, path))
    return codes
