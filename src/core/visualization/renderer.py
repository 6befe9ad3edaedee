import os
from typing import Any, Dict, Optional

from matplotlib.figure import Figure
from matplotlib.patches import Circle

from src.core.visualization.layout import calculate_node_positions, calculate_edges
from src.core.visualization.settings import VisualizerSettings, NodeState


class TreeRenderer:
    """
    Desenha um snapshot da AVL com matplotlib (imagem estática).
    Cada nó mostra a chave e o fator de balanceamento (BF).
    A figura é criada sem pyplot, então não interfere com a janela tkinter.
    """
    DPI = 100

    def __init__(self, settings: Optional[VisualizerSettings] = None):
        self.settings = settings or VisualizerSettings()

    def render(self, snapshot: Optional[Dict[str, Any]],
               highlights: Optional[Dict[Any, str]] = None, title: str = "") -> Figure:
        s = self.settings
        highlights = highlights or {}
        fig = Figure(figsize=(s.canvas_width / self.DPI, s.canvas_height / self.DPI), dpi=self.DPI)
        ax = fig.add_subplot(1, 1, 1)
        ax.set_xlim(0, s.canvas_width)
        ax.set_ylim(s.canvas_height, 0)  # y cresce para baixo, como no canvas
        ax.set_aspect('equal')
        ax.axis('off')
        if title:
            ax.set_title(title)

        if snapshot is None:
            ax.text(s.canvas_width / 2, s.canvas_height / 2, "A árvore AVL está vazia.",
                    ha='center', va='center', color='gray', style='italic')
            return fig

        positions = calculate_node_positions(snapshot, s)
        for (x1, y1), (x2, y2) in calculate_edges(positions, snapshot):
            ax.plot([x1, x2], [y1, y2], color='gray', linewidth=2, zorder=1)

        for pos in positions:
            state = highlights.get(pos.key, NodeState.DEFAULT)
            ax.add_patch(Circle((pos.x, pos.y), s.node_radius,
                                facecolor=s.color_for(state), edgecolor='white', linewidth=2, zorder=2))
            ax.text(pos.x, pos.y - 5, str(pos.key), ha='center', va='center',
                    color='white', fontsize=9, fontweight='bold', zorder=3)
            ax.text(pos.x, pos.y + 7, f"BF: {pos.balance}", ha='center', va='center',
                    color='white', fontsize=6, zorder=3)
        return fig

    def save(self, snapshot, filepath: str, highlights=None, title: str = "") -> str:
        """Exporta o snapshot como PNG."""
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.render(snapshot, highlights, title).savefig(filepath)
        return filepath
