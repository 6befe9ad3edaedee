import sys
import os

import matplotlib
matplotlib.use("Agg")
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.structures.avl_tree import AVLTree
from src.core.models.step import Step, StepType
from src.core.visualization.layout import calculate_node_positions, calculate_edges, tree_depth
from src.core.visualization.player import StepPlayer, step_highlights, traversal_frames
from src.core.visualization.renderer import TreeRenderer
from src.core.visualization.settings import VisualizerSettings, NodeState


def _tree(keys):
    avl = AVLTree()
    for key in keys:
        avl.insert(key)
    return avl


# --- Configurações ---

def test_settings_delay_follows_speed():
    settings = VisualizerSettings()
    assert settings.speed == 50
    assert settings.delay_ms == 600
    settings.speed = 100
    assert settings.delay_ms == 200
    settings.speed = 10
    assert settings.delay_ms == 920


def test_settings_reject_invalid_values():
    with pytest.raises(ValueError):
        VisualizerSettings(speed=0)
    with pytest.raises(ValueError):
        VisualizerSettings(canvas_width=0)
    settings = VisualizerSettings()
    with pytest.raises(ValueError):
        settings.speed = 150


def test_settings_custom_colors():
    settings = VisualizerSettings(colors={NodeState.ROTATED: "#000000"})
    assert settings.color_for(NodeState.ROTATED) == "#000000"
    assert settings.color_for("desconhecido") == settings.color_for(NodeState.DEFAULT)


# --- Layout ---

def test_layout_positions():
    print("--- Teste de Layout ---")
    avl = _tree([20, 10, 30])
    positions = calculate_node_positions(avl.snapshot())
    by_key = {p.key: p for p in positions}

    assert [p.key for p in positions] == [20, 10, 30]
    assert (by_key[20].x, by_key[20].y, by_key[20].level) == (400.0, 50, 0)
    assert (by_key[10].x, by_key[10].y) == (200.0, 130)
    assert (by_key[30].x, by_key[30].y) == (600.0, 130)


def test_layout_edges_and_depth():
    avl = _tree([50, 30, 70, 20])
    snap = avl.snapshot()
    positions = calculate_node_positions(snap)
    edges = calculate_edges(positions, snap)
    assert len(edges) == len(positions) - 1
    assert tree_depth(snap) == 3
    assert tree_depth(None) == 0
    assert calculate_node_positions(None) == []


# --- Player ---

def test_player_steps_through_insert():
    avl = _tree([10, 20])
    steps = avl.insert(30)
    player = StepPlayer(steps)

    assert player.current is None
    first = player.next()
    assert first == Step.compare(10, 30)
    assert player.highlights() == {10: NodeState.HIGHLIGHT}
    player.next()
    assert player.message() == "30 > 10, indo para a direita"

    player.go_end()
    assert player.finished
    assert player.current.step_type == StepType.ROTATED
    assert player.highlights() == {10: NodeState.ROTATED}
    assert player.next() is None

    player.prev()
    assert player.current.step_type == StepType.IMBALANCE_DETECTED
    assert player.highlights() == {10: NodeState.BALANCING}

    player.reset()
    assert player.current is None
    assert player.prev() is None


def _insert_player(keys, new_key):
    """Monta o player de uma inserção da mesma forma que a janela."""
    avl = _tree(keys)
    before = avl.snapshot()
    steps = avl.insert(new_key)
    return StepPlayer.for_insert(before, avl.snapshot(), steps), before, avl


def _drawn_keys(snapshot):
    return {p.key for p in calculate_node_positions(snapshot)}


def test_insert_frames_show_every_highlighted_key():
    print("--- Quadros da animação de inserção ---")
    cases = [
        ([10], 20),                       # nó novo numa árvore com um nó
        ([], 5),                          # árvore vazia
        ([10, 20], 30),                   # RR
        ([30, 10], 20),                   # LR
        ([10, 30], 20),                   # RL
        ([10, 20, 30, 40, 50], 25),       # RL no meio da árvore
        ([20, 10, 30], 10),               # duplicata
    ]
    for keys, new_key in cases:
        player, _, _ = _insert_player(keys, new_key)
        while player.next() is not None:
            drawn = _drawn_keys(player.snapshot)
            assert set(player.highlights()) <= drawn, \
                f"{keys} + {new_key}: {player.current} destaca nó fora do quadro {drawn}"
    print(">> SUCESSO: Todo nó destacado aparece no quadro desenhado.")


def test_insert_frames_switch_to_new_tree_at_inserted_step():
    player, before, avl = _insert_player([10], 20)
    assert player.snapshot == before

    player.next()
    assert player.current == Step.compare(10, 20)
    assert _drawn_keys(player.snapshot) == {10}

    player.go_end()
    assert player.current == Step.balance_checked(10, -1)
    assert player.snapshot == avl.snapshot()

    player.prev()
    assert player.current == Step.inserted(20)
    assert player.highlights() == {20: NodeState.INSERTING}
    assert _drawn_keys(player.snapshot) == {10, 20}


def test_insert_into_empty_tree_starts_empty():
    player, before, _ = _insert_player([], 5)
    assert before is None
    assert player.snapshot is None
    player.next()
    assert _drawn_keys(player.snapshot) == {5}


def test_player_rejects_mismatched_frames():
    steps = _tree([10]).insert(20)
    with pytest.raises(ValueError):
        StepPlayer(steps, frames=[None])


def test_step_highlights_for_insert_and_duplicate():
    assert step_highlights(Step.inserted(5)) == {5: NodeState.INSERTING}
    assert step_highlights(Step.duplicate(5)) == {5: NodeState.HIGHLIGHT}
    assert step_highlights(Step.balance_checked(5, 0)) == {}
    assert step_highlights(None) == {}


def test_traversal_frames():
    frames = traversal_frames([20, 10, 30])
    assert frames[0] == {20: NodeState.HIGHLIGHT}
    assert frames[2] == {20: NodeState.VISITED, 10: NodeState.VISITED, 30: NodeState.HIGHLIGHT}


# --- Renderização ---

def test_renderer_exports_png(tmp_path):
    avl = AVLTree()
    avl.create_sample_tree()
    renderer = TreeRenderer()
    filepath = str(tmp_path / "imagens" / "avl.png")

    result = renderer.save(avl.snapshot(), filepath, highlights={30: NodeState.ROTATED}, title="Exemplo")
    assert result == filepath
    assert os.path.getsize(filepath) > 0
    with open(filepath, 'rb') as f:
        assert f.read(8) == b'\x89PNG\r\n\x1a\n'


def test_renderer_handles_empty_tree(tmp_path):
    filepath = str(tmp_path / "vazia.png")
    TreeRenderer().save(None, filepath)
    assert os.path.exists(filepath)


def test_renderer_leaves_no_pyplot_figures(tmp_path):
    import matplotlib.pyplot as plt
    plt.close('all')

    avl = _tree([10, 20, 30])
    renderer = TreeRenderer()
    fig = renderer.render(avl.snapshot())
    renderer.save(avl.snapshot(), str(tmp_path / "a.png"))
    renderer.save(None, str(tmp_path / "b.png"))

    # Nenhum gerenciador de figura do pyplot foi criado
    assert plt.get_fignums() == []
    assert fig.axes and fig.axes[0].patches


if __name__ == "__main__":
    test_settings_delay_follows_speed()
    test_settings_reject_invalid_values()
    test_settings_custom_colors()
    test_layout_positions()
    test_layout_edges_and_depth()
    test_player_steps_through_insert()
    test_insert_frames_show_every_highlighted_key()
    test_insert_frames_switch_to_new_tree_at_inserted_step()
    test_insert_into_empty_tree_starts_empty()
    test_player_rejects_mismatched_frames()
    test_step_highlights_for_insert_and_duplicate()
    test_traversal_frames()
