from dataclasses import dataclass
from typing import Any, Optional


class StepType:
    COMPARE = "COMPARAR"
    DESCEND = "DESCER"
    DUPLICATE = "DUPLICADO"
    INSERTED = "INSERIDO"
    BALANCE_CHECKED = "BALANCEAMENTO_VERIFICADO"
    IMBALANCE_DETECTED = "DESBALANCEAMENTO_DETECTADO"
    ROTATED = "ROTACIONADO"


class Direction:
    LEFT = "left"
    RIGHT = "right"


class RotationKind:
    LEFT = "left"
    RIGHT = "right"


class ImbalanceCase:
    """
    Os quatro formatos de desbalanceamento da AVL.
    LL e RR pedem uma rotação simples; LR e RL pedem rotação dupla.
    """
    LL = "LL"
    LR = "LR"
    RR = "RR"
    RL = "RL"


@dataclass(frozen=True)
class Step:
    """
    Um passo discreto de uma operação da AVL, emitido para o visualizador.
    Apenas os campos relevantes para o tipo do passo são preenchidos.
    """
    step_type: str
    node_key: Any = None              # Chave do nó visitado / pivô da rotação
    key: Any = None                   # Chave sendo inserida
    direction: Optional[str] = None
    factor: Optional[int] = None
    rotation: Optional[str] = None
    case: Optional[str] = None

    # --- Construtores por tipo ---

    @classmethod
    def compare(cls, node_key, key) -> "Step":
        return cls(StepType.COMPARE, node_key=node_key, key=key)

    @classmethod
    def descend(cls, direction: str) -> "Step":
        return cls(StepType.DESCEND, direction=direction)

    @classmethod
    def duplicate(cls, key) -> "Step":
        return cls(StepType.DUPLICATE, key=key)

    @classmethod
    def inserted(cls, key) -> "Step":
        return cls(StepType.INSERTED, key=key)

    @classmethod
    def balance_checked(cls, node_key, factor: int) -> "Step":
        return cls(StepType.BALANCE_CHECKED, node_key=node_key, factor=factor)

    @classmethod
    def imbalance_detected(cls, node_key, factor: int) -> "Step":
        return cls(StepType.IMBALANCE_DETECTED, node_key=node_key, factor=factor)

    @classmethod
    def rotated(cls, pivot_key, kind: str, case: Optional[str] = None) -> "Step":
        return cls(StepType.ROTATED, node_key=pivot_key, rotation=kind, case=case)

    def __repr__(self):
        if self.step_type == StepType.COMPARE:
            return f"[{self.step_type}] {self.node_key} vs {self.key}"
        if self.step_type == StepType.DESCEND:
            return f"[{self.step_type}] {self.direction}"
        if self.step_type in (StepType.DUPLICATE, StepType.INSERTED):
            return f"[{self.step_type}] {self.key}"
        if self.step_type == StepType.ROTATED:
            return f"[{self.step_type}] {self.rotation} @ {self.node_key} ({self.case})"
        return f"[{self.step_type}] {self.node_key} fb={self.factor}"
