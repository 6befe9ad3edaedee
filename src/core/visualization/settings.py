from typing import Dict, Optional


class NodeState:
    DEFAULT = "default"
    HIGHLIGHT = "highlight"
    INSERTING = "inserting"
    BALANCING = "balancing"
    ROTATED = "rotated"
    VISITED = "visited"


DEFAULT_COLORS: Dict[str, str] = {
    NodeState.DEFAULT: "#3B82F6",     # Azul
    NodeState.HIGHLIGHT: "#F59E0B",   # Amarelo: nó sendo comparado
    NodeState.INSERTING: "#8B5CF6",   # Roxo: nó recém inserido
    NodeState.BALANCING: "#EF4444",   # Vermelho: desbalanceamento
    NodeState.ROTATED: "#10B981",     # Verde: nós rotacionados
    NodeState.VISITED: "#6B7280",     # Cinza: já visitado no percurso
}


class VisualizerSettings:
    """
    Parâmetros de apresentação do visualizador (canvas, animação, cores, console).
    """
    MIN_SPEED = 10
    MAX_SPEED = 100

    def __init__(self,
                 canvas_width: int = 800,
                 canvas_height: int = 400,
                 node_radius: int = 20,
                 vertical_spacing: int = 80,
                 top_margin: int = 50,
                 speed: int = 50,
                 log_limit: int = 50,
                 colors: Optional[Dict[str, str]] = None):
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError("As dimensões do canvas devem ser maiores que zero.")
        if node_radius <= 0:
            raise ValueError("O raio do nó deve ser maior que zero.")
        if log_limit <= 0:
            raise ValueError("O limite do console deve ser maior que zero.")

        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.node_radius = node_radius
        self.vertical_spacing = vertical_spacing
        self.top_margin = top_margin
        self.log_limit = log_limit
        self.colors = dict(DEFAULT_COLORS)
        if colors:
            self.colors.update(colors)
        self.speed = speed

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int):
        if not (self.MIN_SPEED <= value <= self.MAX_SPEED):
            raise ValueError(f"Velocidade deve estar entre {self.MIN_SPEED} e {self.MAX_SPEED}.")
        self._speed = value

    @property
    def delay_ms(self) -> int:
        """Intervalo entre passos da animação: 920 ms (lento) a 200 ms (rápido)."""
        return 1000 - self._speed * 8

    def color_for(self, state: str) -> str:
        return self.colors.get(state, self.colors[NodeState.DEFAULT])

    def __repr__(self):
        return f"VisualizerSettings({self.canvas_width}x{self.canvas_height}, speed={self._speed})"
