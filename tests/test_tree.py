from bubbleengine.tree import Node, Tree


def _collect(node):
    values = [node.data]
    for child in node:
        values.extend(_collect(child))
    return values


def test_new_node_is_empty():
    node = Node()
    assert node.data is None
    assert len(node) == 0
    assert list(node) == []


def test_append_wraps_plain_values():
    node = Node("root")
    child = node.append(42)
    assert child.data == 42
    assert list(node) == [child]


def test_append_keeps_given_node():
    node = Node("root")
    child = Node("leaf")
    returned = node.append(child)
    assert returned is child
    assert node.children[0] is child


def test_children_keep_insertion_order():
    node = Node()
    values = ["a", "b", "c"]
    for value in values:
        node.append(value)
    assert [child.data for child in node] == values
    assert len(node) == len(values)


def test_data_can_be_replaced():
    node = Node(1)
    node.data = 2
    assert node.data == 2


def test_tree_default_root_and_replacement():
    tree = Tree()
    assert tree.root.data is None
    new_root = Node("scene")
    tree.root = new_root
    assert tree.root is new_root


def test_nested_walk_is_depth_first():
    tree = Tree(Node("r"))
    first = tree.root.append("a")
    first.append("a1")
    tree.root.append("b")
    assert _collect(tree.root) == ["r", "a", "a1", "b"]


def test_separate_nodes_do_not_share_children():
    left, right = Node(), Node()
    left.append("x")
    assert len(right) == 0