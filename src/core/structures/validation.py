import math
from typing import Tuple

from src.core.structures.avl_tree import AVLTree


def validate_bst(node, min_val=float('-inf'), max_val=float('inf')) -> Tuple[bool, str]:
    """Verifica a ordem estrita de BST (sem duplicatas)."""
    if node is None:
        return True, "OK"
    if not (min_val < node.key < max_val):
        return False, f"Chave {node.key} fora do intervalo ({min_val}, {max_val})"
    ok, msg = validate_bst(node.left, min_val, node.key)
    if not ok:
        return ok, msg
    return validate_bst(node.right, node.key, max_val)


def validate_heights(node) -> Tuple[bool, str]:
    """Confere se a altura armazenada em cada nó está correta."""
    if node is None:
        return True, "OK"
    for child in (node.left, node.right):
        ok, msg = validate_heights(child)
        if not ok:
            return ok, msg
    expected = 1 + max(AVLTree.height(node.left), AVLTree.height(node.right))
    if node.height != expected:
        return False, f"Altura de {node.key} é {node.height}, esperado {expected}"
    return True, "OK"


def validate_avl(node) -> Tuple[bool, str]:
    """|fator de balanceamento| <= 1 em todos os nós."""
    if node is None:
        return True, "OK"
    factor = AVLTree.balance_factor(node)
    if abs(factor) > 1:
        return False, f"Nó {node.key} desbalanceado (fator: {factor})"
    ok, msg = validate_avl(node.left)
    if not ok:
        return ok, msg
    return validate_avl(node.right)


def validate_tree(tree: AVLTree) -> Tuple[bool, str]:
    for check in (validate_bst, validate_heights, validate_avl):
        ok, msg = check(tree.root)
        if not ok:
            return ok, msg
    return True, "Árvore AVL válida"


def max_avl_height(n: int) -> float:
    """Limite de pior caso da altura de uma AVL com n nós."""
    return 1.44 * math.log2(n + 2)
