import re
from typing import List

INVALID_KEY_MESSAGE = "Por favor, insira um número válido"


def parse_key(text: str) -> int:
    """Converte o texto do campo de entrada em chave inteira."""
    if text is None:
        raise ValueError(INVALID_KEY_MESSAGE)
    text = text.strip()
    if not re.fullmatch(r"[+-]?\d+", text):
        raise ValueError(INVALID_KEY_MESSAGE)
    return int(text)


def parse_keys(text: str) -> List[int]:
    """Aceita várias chaves separadas por vírgula e/ou espaço ("10, 20 30")."""
    tokens = [t for t in re.split(r"[,\s]+", text or "") if t]
    if not tokens:
        raise ValueError(INVALID_KEY_MESSAGE)
    return [parse_key(t) for t in tokens]
