from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from src.core.visualization.settings import VisualizerSettings


@dataclass
class NodePosition:
    key: Any
    x: float
    y: float
    level: int
    balance: int = 0


def calculate_node_positions(snapshot: Optional[Dict[str, Any]],
                             settings: Optional[VisualizerSettings] = None) -> List[NodePosition]:
    """
    Posiciona os nós de um snapshot da árvore (pré-ordem).
    A raiz fica no meio do canvas e o deslocamento horizontal cai pela metade a cada nível.
    """
    settings = settings or VisualizerSettings()
    positions: List[NodePosition] = []
    _place(snapshot, 0, 0.5, settings, positions)
    return positions


def _place(node, level: int, position: float, settings: VisualizerSettings, out: List[NodePosition]):
    if node is None:
        return
    width = settings.canvas_width
    y = level * settings.vertical_spacing + settings.top_margin
    # Fração do canvas entre pai e filho: 1/4 no primeiro nível, 1/8 no seguinte...
    offset = 1 / 2 ** (level + 2)

    out.append(NodePosition(node['key'], position * width, y, level, node.get('balance', 0)))
    _place(node['left'], level + 1, position - offset, settings, out)
    _place(node['right'], level + 1, position + offset, settings, out)


def calculate_edges(positions: List[NodePosition],
                    snapshot: Optional[Dict[str, Any]]) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """Segmentos pai -> filho, na mesma ordem dos nós."""
    by_key = {p.key: p for p in positions}
    edges = []

    def walk(node):
        if node is None:
            return
        parent = by_key[node['key']]
        for child in (node['left'], node['right']):
            if child is not None:
                pos = by_key[child['key']]
                edges.append(((parent.x, parent.y), (pos.x, pos.y)))
        walk(node['left'])
        walk(node['right'])

    walk(snapshot)
    return edges


def tree_depth(snapshot: Optional[Dict[str, Any]]) -> int:
    if snapshot is None:
        return 0
    return snapshot['height']
