"""
tree.py — Binary Search Tree Operations
=======================================
Generator-based BST insert, search and the four traversals.  Each
generator takes the input values, inserts them in order into an empty
BST (smaller values left, larger right, duplicates ignored) and yields
TreeStep snapshots.

    bst_insert    one comparison step per node passed, one step per placement
    bst_search    builds the tree first, then walks from the root
    inorder / preorder / postorder / level_order
                  builds the tree first, then one step per node output

The depth-first traversals use an explicit stack, so a degenerate
(sorted-input) tree cannot hit the recursion limit.
"""

from collections import deque
from typing import Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.sort_tracer import fmt, fmt_array
from algorithms.step import Number, TreeNodeView, TreeStep


INSERT_PSEUDOCODE: List[str] = [
    "def insert(node, value):",                          # 0
    "    if node is None: return Node(value)",           # 1
    "    if value < node.value: node.left = insert(node.left, value)",    # 2
    "    elif value > node.value: node.right = insert(node.right, value)",  # 3
    "    return node",                                   # 4
]

SEARCH_PSEUDOCODE: List[str] = [
    "def search(node, value):",                          # 0
    "    if node is None: return False",                 # 1
    "    if value == node.value: return True",           # 2
    "    if value < node.value: return search(node.left, value)",  # 3
    "    return search(node.right, value)",              # 4
]

INORDER_PSEUDOCODE: List[str] = [
    "def inorder(node):",                                # 0
    "    if node is None: return",                       # 1
    "    inorder(node.left)",                            # 2
    "    visit(node)",                                   # 3
    "    inorder(node.right)",                           # 4
]

PREORDER_PSEUDOCODE: List[str] = [
    "def preorder(node):",                               # 0
    "    if node is None: return",                       # 1
    "    visit(node)",                                   # 2
    "    preorder(node.left)",                           # 3
    "    preorder(node.right)",                          # 4
]

POSTORDER_PSEUDOCODE: List[str] = [
    "def postorder(node):",                              # 0
    "    if node is None: return",                       # 1
    "    postorder(node.left)",                          # 2
    "    postorder(node.right)",                         # 3
    "    visit(node)",                                   # 4
]

LEVEL_ORDER_PSEUDOCODE: List[str] = [
    "def level_order(root):",                            # 0
    "    queue = [root]",                                # 1
    "    while queue:",                                  # 2
    "        node = queue.pop(0); visit(node)",          # 3
    "        if node.left: queue.append(node.left)",     # 4
    "        if node.right: queue.append(node.right)",   # 5
]


class SearchTree:
    """
    Value-keyed BST.  `children[v]` is [left, right]; dict order is
    insertion order, which is also the order of TreeStep.nodes.
    """

    def __init__(self, values: Sequence[Number] = ()):
        self.root: Optional[Number] = None
        self.children: Dict[Number, List[Optional[Number]]] = {}
        for value in values:
            self.insert(value)

    def insert(self, value: Number) -> bool:
        """Silent insert.  False for a duplicate."""
        if value in self.children:
            return False
        self.children[value] = [None, None]
        if self.root is None:
            self.root = value
            return True
        cur = self.root
        while True:
            side = 0 if value < cur else 1
            child = self.children[cur][side]
            if child is None:
                self.children[cur][side] = value
                return True
            cur = child

    def view(self) -> Tuple[TreeNodeView, ...]:
        return tuple(TreeNodeView(v, lr[0], lr[1]) for v, lr in self.children.items())

    def __len__(self) -> int:
        return len(self.children)


# ---------------------------------------------------------------------------
# Insert & search
# ---------------------------------------------------------------------------
def bst_insert(values: Sequence[Number]) -> Generator[TreeStep, None, None]:
    code = INSERT_PSEUDOCODE
    tree = SearchTree()
    yield TreeStep(nodes=(), code=code[0],
                   description=f"Inserting {fmt_array(values)} into an empty binary search tree")

    for value in values:
        if tree.root is None:
            tree.insert(value)
            yield TreeStep(nodes=tree.view(), code=code[1], current=value, key=value, path=(value,),
                           description=f"The tree is empty: {fmt(value)} becomes the root")
            continue

        path: List[Number] = []
        cur = tree.root
        while True:
            path.append(cur)
            yield TreeStep(nodes=tree.view(), code=code[2], current=cur, comparing=True, key=value,
                           path=tuple(path),
                           description=f"Inserting {fmt(value)}: comparing with {fmt(cur)}")
            if value == cur:
                yield TreeStep(nodes=tree.view(), code=code[4], current=cur, key=value, path=tuple(path),
                               description=f"{fmt(value)} is already in the tree; skipped")
                break
            side = 0 if value < cur else 1
            child = tree.children[cur][side]
            if child is None:
                tree.insert(value)
                yield TreeStep(nodes=tree.view(), code=code[2 + side], current=value, key=value,
                               path=tuple(path) + (value,),
                               description=f"Placed {fmt(value)} as the {('left', 'right')[side]} child of {fmt(cur)}")
                break
            cur = child

    yield TreeStep(nodes=tree.view(), code=code[4], complete=True,
                   description=f"Tree built with {len(tree)} nodes")


def bst_search(values: Sequence[Number], target: Number) -> Generator[TreeStep, None, None]:
    code = SEARCH_PSEUDOCODE
    tree = SearchTree(values)
    nodes = tree.view()
    yield TreeStep(nodes=nodes, code=code[0], key=target,
                   description=f"Searching for {fmt(target)} from the root")

    path: List[Number] = []
    cur = tree.root
    while cur is not None:
        path.append(cur)
        hit = cur == target
        yield TreeStep(nodes=nodes, code=code[2], current=cur, comparing=True, key=target,
                       path=tuple(path), found=hit,
                       description=f"Comparing {fmt(target)} with {fmt(cur)}")
        if hit:
            yield TreeStep(nodes=nodes, code=code[2], current=cur, key=target, path=tuple(path),
                           found=True, complete=True,
                           description=f"Found {fmt(target)} at depth {len(path) - 1}")
            return
        side = 0 if target < cur else 1
        cur = tree.children[cur][side]

    text = "The tree is empty" if tree.root is None else f"{fmt(target)} is not in the tree"
    yield TreeStep(nodes=nodes, code=code[1], key=target, path=tuple(path), complete=True,
                   description=text)


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------
def _depth_first(values: Sequence[Number], name: str, code: List[str],
                 visit_line: int) -> Generator[TreeStep, None, None]:
    tree = SearchTree(values)
    nodes = tree.view()
    yield TreeStep(nodes=nodes, code=code[0], description=f"Starting {name} traversal at the root")

    output: List[Number] = []
    # (value, expanded): an expanded entry is output when popped
    stack: List[Tuple[Number, bool]] = [] if tree.root is None else [(tree.root, False)]
    while stack:
        value, expanded = stack.pop()
        if expanded:
            output.append(value)
            yield TreeStep(nodes=nodes, code=code[visit_line], current=value, output=tuple(output),
                           description=f"Visit {fmt(value)}")
            continue
        left, right = tree.children[value]
        if name == "in-order":
            order = [(right, False), (value, True), (left, False)]
        elif name == "pre-order":
            order = [(right, False), (left, False), (value, True)]
        else:
            order = [(value, True), (right, False), (left, False)]
        stack.extend((v, e) for v, e in order if v is not None)

    yield TreeStep(nodes=nodes, code=code[0], output=tuple(output), complete=True,
                   description=f"{name.capitalize()} traversal: {fmt_array(output)}")


def inorder(values: Sequence[Number]) -> Generator[TreeStep, None, None]:
    return _depth_first(values, "in-order", INORDER_PSEUDOCODE, visit_line=3)


def preorder(values: Sequence[Number]) -> Generator[TreeStep, None, None]:
    return _depth_first(values, "pre-order", PREORDER_PSEUDOCODE, visit_line=2)


def postorder(values: Sequence[Number]) -> Generator[TreeStep, None, None]:
    return _depth_first(values, "post-order", POSTORDER_PSEUDOCODE, visit_line=4)


def level_order(values: Sequence[Number]) -> Generator[TreeStep, None, None]:
    code = LEVEL_ORDER_PSEUDOCODE
    tree = SearchTree(values)
    nodes = tree.view()
    queue = deque([] if tree.root is None else [tree.root])
    yield TreeStep(nodes=nodes, code=code[1], queue=tuple(queue),
                   description="Starting level-order traversal with the root queued")

    output: List[Number] = []
    while queue:
        value = queue.popleft()
        output.append(value)
        queue.extend(c for c in tree.children[value] if c is not None)
        yield TreeStep(nodes=nodes, code=code[3], current=value, output=tuple(output),
                       queue=tuple(queue),
                       description=f"Visit {fmt(value)}, queue its children")

    yield TreeStep(nodes=nodes, code=code[2], output=tuple(output), complete=True,
                   description=f"Level-order traversal: {fmt_array(output)}")
