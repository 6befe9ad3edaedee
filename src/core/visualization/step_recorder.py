from typing import List, Optional

from src.core.models.step import Step, StepType, Direction, RotationKind


def _rotation_name(kind: str) -> str:
    return "Rotação à esquerda" if kind == RotationKind.LEFT else "Rotação à direita"


def describe_step(step: Step, last_compare: Optional[Step] = None) -> str:
    """
    Converte um passo na mensagem exibida ao usuário.
    Para DESCER, usa o último COMPARAR para mostrar as chaves envolvidas.
    """
    if step.step_type == StepType.COMPARE:
        return f"Comparando {step.key} com {step.node_key}..."
    if step.step_type == StepType.DESCEND:
        side = "esquerda" if step.direction == Direction.LEFT else "direita"
        if last_compare is None:
            return f"Indo para a {side}"
        op = "<" if step.direction == Direction.LEFT else ">"
        return f"{last_compare.key} {op} {last_compare.node_key}, indo para a {side}"
    if step.step_type == StepType.DUPLICATE:
        return f"{step.key} já existe na árvore"
    if step.step_type == StepType.INSERTED:
        return f"Inserido {step.key} na árvore"
    if step.step_type == StepType.BALANCE_CHECKED:
        return f"Verificando fator de balanceamento em {step.node_key}: {step.factor}"
    if step.step_type == StepType.IMBALANCE_DETECTED:
        return f"Desbalanceamento detectado em {step.node_key} (fator: {step.factor})"
    if step.step_type == StepType.ROTATED:
        case = f" (caso {step.case})" if step.case else ""
        return f"{_rotation_name(step.rotation)}{case} em {step.node_key}"
    return repr(step)


class StepRecorder:
    """
    Sink de passos: guarda tudo na ordem de emissão e narra no console.
    Pode ser passado direto como sink da AVLTree (é chamável).
    """
    def __init__(self, log_limit: int = 50, echo: bool = False):
        if log_limit <= 0:
            raise ValueError("O limite do console deve ser maior que zero.")
        self.log_limit = log_limit
        self.echo = echo
        self.steps: List[Step] = []
        self.logs: List[str] = []
        self._last_compare: Optional[Step] = None

    def __call__(self, step: Step):
        self.record(step)

    def record(self, step: Step):
        self.steps.append(step)
        self.log(describe_step(step, self._last_compare))
        if step.step_type == StepType.COMPARE:
            self._last_compare = step

    def log(self, msg: str):
        if self.echo:
            print(msg)
        self.logs.append(msg)
        # Mantém apenas as últimas mensagens na memória da UI
        if len(self.logs) > self.log_limit:
            self.logs.pop(0)

    def clear_steps(self):
        """Zera os passos entre operações; o console é mantido."""
        self.steps = []
        self._last_compare = None

    def count(self, step_type: str) -> int:
        return sum(1 for s in self.steps if s.step_type == step_type)

    @staticmethod
    def narrate(steps: List[Step]) -> List[str]:
        """Mensagens de uma lista de passos, sem tocar em nenhum recorder."""
        messages = []
        last_compare = None
        for step in steps:
            messages.append(describe_step(step, last_compare))
            if step.step_type == StepType.COMPARE:
                last_compare = step
        return messages

    def __len__(self):
        return len(self.steps)
