from typing import Any, Dict, List, Optional

from src.core.models.step import Step, StepType
from src.core.visualization.settings import VisualizerSettings, NodeState
from src.core.visualization.step_recorder import describe_step

Snapshot = Optional[Dict[str, Any]]

_STEP_STATES = {
    StepType.COMPARE: NodeState.HIGHLIGHT,
    StepType.DUPLICATE: NodeState.HIGHLIGHT,
    StepType.INSERTED: NodeState.INSERTING,
    StepType.IMBALANCE_DETECTED: NodeState.BALANCING,
    StepType.ROTATED: NodeState.ROTATED,
}


def step_highlights(step: Optional[Step]) -> Dict[Any, str]:
    """Estado visual (cor) dos nós afetados por um passo."""
    if step is None or step.step_type not in _STEP_STATES:
        return {}
    key = step.node_key if step.node_key is not None else step.key
    return {key: _STEP_STATES[step.step_type]}


def traversal_frames(keys: List[Any]) -> List[Dict[Any, str]]:
    """
    Quadros da animação de percurso: o nó atual em destaque e os anteriores como visitados.
    """
    frames = []
    visited: Dict[Any, str] = {}
    for key in keys:
        frame = dict(visited)
        frame[key] = NodeState.HIGHLIGHT
        frames.append(frame)
        visited[key] = NodeState.VISITED
    return frames


def insert_frames(before: Snapshot, after: Snapshot, steps: List[Step]) -> List[Snapshot]:
    """
    Snapshot a desenhar em cada passo de uma inserção.
    Até o passo INSERIDO vale a árvore antiga; dali em diante, a árvore já rebalanceada.
    """
    frames = []
    current = before
    for step in steps:
        if step.step_type == StepType.INSERTED:
            current = after
        frames.append(current)
    return frames


class StepPlayer:
    """
    Reproduz passos já calculados: avança, volta, reinicia ou pula para o fim.
    O ritmo da animação vem das configurações.
    """
    def __init__(self, steps: List[Step], settings: Optional[VisualizerSettings] = None,
                 frames: Optional[List[Snapshot]] = None, initial: Snapshot = None):
        if frames is not None and len(frames) != len(steps):
            raise ValueError("Deve haver um snapshot por passo.")
        self.steps = list(steps)
        self.settings = settings or VisualizerSettings()
        self.frames = frames
        self.initial = initial   # Árvore exibida antes do primeiro passo
        self.index = -1          # Nenhum passo exibido ainda

    @classmethod
    def for_insert(cls, before: Snapshot, after: Snapshot, steps: List[Step],
                   settings: Optional[VisualizerSettings] = None) -> "StepPlayer":
        return cls(steps, settings, insert_frames(before, after, steps), initial=before)

    @property
    def current(self) -> Optional[Step]:
        if 0 <= self.index < len(self.steps):
            return self.steps[self.index]
        return None

    @property
    def snapshot(self) -> Snapshot:
        """Árvore correspondente ao passo atual."""
        if self.frames is None or self.current is None:
            return self.initial
        return self.frames[self.index]

    @property
    def finished(self) -> bool:
        return self.index >= len(self.steps) - 1

    @property
    def delay_ms(self) -> int:
        return self.settings.delay_ms

    def next(self) -> Optional[Step]:
        if self.finished:
            return None
        self.index += 1
        return self.current

    def prev(self) -> Optional[Step]:
        if self.index <= 0:
            self.index = -1
            return None
        self.index -= 1
        return self.current

    def reset(self):
        self.index = -1

    def go_end(self):
        self.index = len(self.steps) - 1

    def highlights(self) -> Dict[Any, str]:
        return step_highlights(self.current)

    def message(self) -> str:
        step = self.current
        if step is None:
            return ""
        last_compare = None
        for previous in self.steps[:self.index]:
            if previous.step_type == StepType.COMPARE:
                last_compare = previous
        return describe_step(step, last_compare)

    def __len__(self):
        return len(self.steps)
