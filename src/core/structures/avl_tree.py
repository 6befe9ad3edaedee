from typing import Any, Callable, Dict, Iterator, List, Optional

from src.core.models.step import Step, Direction, RotationKind, ImbalanceCase

StepSink = Callable[[Step], None]


class RotationError(RuntimeError):
    """Rotação pedida sobre um filho inexistente: invariante interna quebrada."""


class TraversalOrder:
    IN_ORDER = "in-order"
    PRE_ORDER = "pre-order"
    POST_ORDER = "post-order"

    ALL = (IN_ORDER, PRE_ORDER, POST_ORDER)


class AVLNode:
    """
    Nó interno da Árvore AVL.
    Armazena a chave e a altura da subárvore enraizada nele.
    """
    def __init__(self, key):
        self.key = key
        self.left = None
        self.right = None
        self.height = 1         # Altura inicial do nó (folha) é 1

    def __repr__(self):
        return f"AVLNode({self.key}, h={self.height})"


class Traversal:
    """
    Sequência preguiçosa das chaves da árvore numa ordem de percurso.
    Cada chamada a iter() percorre a árvore de novo, então pode ser reiniciada.
    """
    def __init__(self, tree: "AVLTree", order: str):
        if order not in TraversalOrder.ALL:
            raise ValueError(f"Ordem de percurso desconhecida: {order}")
        self.tree = tree
        self.order = order

    def __iter__(self) -> Iterator[Any]:
        return self._walk(self.tree.root)

    def _walk(self, node) -> Iterator[Any]:
        if not node:
            return
        if self.order == TraversalOrder.PRE_ORDER:
            yield node.key
        yield from self._walk(node.left)
        if self.order == TraversalOrder.IN_ORDER:
            yield node.key
        yield from self._walk(node.right)
        if self.order == TraversalOrder.POST_ORDER:
            yield node.key

    def __repr__(self):
        return f"Traversal({self.order})"


class AVLTree:
    """
    Árvore AVL que narra cada decisão como um Step.
    Os passos vão para o sink recebido em insert() e para o sink padrão da árvore,
    sem nenhuma dependência de renderização ou de tempo.
    Garante busca e inserção em O(log n).
    """
    SAMPLE_KEYS = [10, 20, 30, 40, 50, 25]

    def __init__(self, sink: Optional[StepSink] = None, verbose: bool = False):
        self.root = None
        self.sink = sink
        self.verbose = verbose

    # --- Operações públicas ---

    def insert(self, key, sink: Optional[StepSink] = None) -> List[Step]:
        """Insere uma chave, rebalanceia e retorna a lista de passos emitidos."""
        steps: List[Step] = []

        def emit(step: Step):
            steps.append(step)
            if sink is not None:
                sink(step)
            if self.sink is not None:
                self.sink(step)

        if self.verbose:
            print(f"[AVL] Inserindo {key}...")
        self.root = self._insert_recursive(self.root, key, emit)
        if self.verbose:
            print(f"[AVL] {len(steps)} passos, raiz atual: {self.root.key}")
        return steps

    def find(self, key) -> bool:
        """Busca em O(log n), sem alterar a árvore."""
        current = self.root
        while current:
            if key == current.key:
                return True
            elif key < current.key:
                current = current.left
            else:
                current = current.right
        return False

    def traverse(self, order: str = TraversalOrder.IN_ORDER) -> Traversal:
        return Traversal(self, order)

    def clear(self):
        self.root = None
        if self.verbose:
            print("[AVL] Árvore limpa.")

    def create_sample_tree(self) -> bool:
        """
        Monta a árvore de exemplo (10, 20, 30, 40, 50, 25).
        Só funciona com a árvore vazia; os passos não são enviados ao sink.
        """
        if self.root is not None:
            return False
        for key in self.SAMPLE_KEYS:
            self.root = self._insert_recursive(self.root, key, lambda step: None)
        return True

    def snapshot(self) -> Optional[Dict[str, Any]]:
        """Retorna uma cópia recursiva (dicts) do estado atual, para o visualizador."""
        return self._snapshot(self.root)

    # --- Inserção ---

    def _insert_recursive(self, node, key, emit: StepSink):
        # 1. Inserção normal de BST
        if not node:
            emit(Step.inserted(key))
            return AVLNode(key)

        emit(Step.compare(node.key, key))
        if key < node.key:
            emit(Step.descend(Direction.LEFT))
            node.left = self._insert_recursive(node.left, key, emit)
        elif key > node.key:
            emit(Step.descend(Direction.RIGHT))
            node.right = self._insert_recursive(node.right, key, emit)
        else:
            # Chaves duplicadas são ignoradas
            emit(Step.duplicate(key))
            return node

        # 2. Atualizar altura do nó ancestral
        node.height = 1 + max(self.height(node.left), self.height(node.right))

        # 3. Fator de balanceamento
        balance = self.balance_factor(node)
        emit(Step.balance_checked(node.key, balance))

        if abs(balance) > 1:
            emit(Step.imbalance_detected(node.key, balance))
            return self._rebalance(node, balance, emit)
        return node

    def _rebalance(self, node, balance: int, emit: StepSink):
        """
        Escolhe o caso pelo sinal do fator do filho, não pela chave inserida.
        """
        if balance > 1:
            if self.balance_factor(node.left) >= 0:
                # Caso LL - Rotação à direita
                emit(Step.rotated(node.key, RotationKind.RIGHT, ImbalanceCase.LL))
                return self.rotate_right(node)
            # Caso LR - Rotação dupla
            emit(Step.rotated(node.left.key, RotationKind.LEFT, ImbalanceCase.LR))
            node.left = self.rotate_left(node.left)
            emit(Step.rotated(node.key, RotationKind.RIGHT, ImbalanceCase.LR))
            return self.rotate_right(node)

        if self.balance_factor(node.right) <= 0:
            # Caso RR - Rotação à esquerda
            emit(Step.rotated(node.key, RotationKind.LEFT, ImbalanceCase.RR))
            return self.rotate_left(node)
        # Caso RL - Rotação dupla
        emit(Step.rotated(node.right.key, RotationKind.RIGHT, ImbalanceCase.RL))
        node.right = self.rotate_right(node.right)
        emit(Step.rotated(node.key, RotationKind.LEFT, ImbalanceCase.RL))
        return self.rotate_left(node)

    # --- Métodos Auxiliares e Rotações ---

    @staticmethod
    def height(node) -> int:
        if not node:
            return 0
        return node.height

    @staticmethod
    def balance_factor(node) -> int:
        if not node:
            return 0
        return AVLTree.height(node.left) - AVLTree.height(node.right)

    @staticmethod
    def rotate_left(x):
        """
        Rotação simples à esquerda.
        Usada quando o peso está na direita (Right-Right).
        """
        y = x.right
        if y is None:
            raise RotationError(f"Rotação à esquerda em {x.key} sem filho direito.")
        T2 = y.left

        # Rotação
        y.left = x
        x.right = T2

        # Atualiza alturas (x primeiro, pois agora é filho de y)
        x.height = 1 + max(AVLTree.height(x.left), AVLTree.height(x.right))
        y.height = 1 + max(AVLTree.height(y.left), AVLTree.height(y.right))

        return y

    @staticmethod
    def rotate_right(y):
        """
        Rotação simples à direita.
        Usada quando o peso está na esquerda (Left-Left).
        """
        x = y.left
        if x is None:
            raise RotationError(f"Rotação à direita em {y.key} sem filho esquerdo.")
        T2 = x.right

        x.right = y
        y.left = T2

        y.height = 1 + max(AVLTree.height(y.left), AVLTree.height(y.right))
        x.height = 1 + max(AVLTree.height(x.left), AVLTree.height(x.right))

        return x

    def _snapshot(self, node):
        if not node:
            return None
        return {
            'key': node.key,
            'height': node.height,
            'balance': self.balance_factor(node),
            'left': self._snapshot(node.left),
            'right': self._snapshot(node.right),
        }

    # --- Protocolo de contêiner ---

    def __contains__(self, key) -> bool:
        return self.find(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.traverse(TraversalOrder.IN_ORDER))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self):
        root_key = self.root.key if self.root else None
        return f"AVLTree(raiz={root_key}, n={len(self)})"
