# src/ui/avl_gui.py
import tkinter as tk
from tkinter import ttk, scrolledtext, filedialog
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from src.core.structures.avl_tree import AVLTree, TraversalOrder
from src.core.structures.validation import validate_tree
from src.core.visualization.layout import calculate_node_positions, calculate_edges
from src.core.visualization.player import StepPlayer, traversal_frames
from src.core.visualization.renderer import TreeRenderer
from src.core.visualization.settings import VisualizerSettings, NodeState
from src.core.visualization.step_recorder import StepRecorder
from src.ui.commands import parse_key, parse_keys

ORDER_LABELS = {
    "Em-ordem": TraversalOrder.IN_ORDER,
    "Pré-ordem": TraversalOrder.PRE_ORDER,
    "Pós-ordem": TraversalOrder.POST_ORDER,
}


class AVLVisualizerApp:
    def __init__(self, root, settings: VisualizerSettings = None):
        self.root = root
        self.root.title("Visualizador de Árvore AVL")
        self.root.minsize(900, 650)
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        self.settings = settings or VisualizerSettings()
        self.recorder = StepRecorder(log_limit=self.settings.log_limit, echo=True)
        self.tree = AVLTree(sink=self.recorder)
        self.renderer = TreeRenderer(self.settings)

        self.is_animating = False
        self.pending_keys = []
        self.player = None            # Passos da última inserção, para revisão

        self.create_layout()
        self.draw_tree()

    def create_layout(self):
        # --- 1. BARRA DE FERRAMENTAS ---
        toolbar = tk.Frame(self.root, bd=1, relief=tk.RAISED, bg="#f0f0f0")
        toolbar.pack(side=tk.TOP, fill=tk.X)
        btn_opts = {'side': tk.LEFT, 'padx': 5, 'pady': 5}

        tk.Label(toolbar, text="Valor:", bg="#f0f0f0").pack(**btn_opts)
        self.entry = tk.Entry(toolbar, width=18)
        self.entry.pack(**btn_opts)
        self.entry.bind("<Return>", lambda e: self.insert_keys())

        self.buttons = [
            tk.Button(toolbar, text="Inserir", command=self.insert_keys, bg="#ddffdd"),
            tk.Button(toolbar, text="Buscar", command=self.search_key),
            tk.Button(toolbar, text="Árvore de Exemplo", command=self.create_sample),
        ]
        for btn in self.buttons:
            btn.pack(**btn_opts)

        self.order_var = tk.StringVar(value="Em-ordem")
        ttk.Combobox(toolbar, textvariable=self.order_var, values=list(ORDER_LABELS),
                     state="readonly", width=10).pack(**btn_opts)
        for text, cmd, bg in (("Percorrer", self.traverse, None),
                              ("Limpar", self.clear_tree, "#ffaaaa"),
                              ("Exportar PNG", self.export_png, None),
                              ("◀ Passo", self.step_back, "#eeeeff"),
                              ("Passo ▶", self.step_forward, "#eeeeff"),
                              ("⏭ Fim", self.go_end, "#eeeeff")):
            btn = tk.Button(toolbar, text=text, command=cmd, bg=bg) if bg else tk.Button(toolbar, text=text, command=cmd)
            btn.pack(**btn_opts)
            self.buttons.append(btn)

        tk.Label(toolbar, text="Velocidade:", bg="#f0f0f0").pack(**btn_opts)
        self.speed_scale = tk.Scale(toolbar, from_=VisualizerSettings.MIN_SPEED, to=VisualizerSettings.MAX_SPEED,
                                    resolution=10, orient=tk.HORIZONTAL, command=self.on_speed_change)
        self.speed_scale.set(self.settings.speed)
        self.speed_scale.pack(**btn_opts)

        # --- 2. MENSAGEM ---
        self.lbl_message = tk.Label(self.root, text="", bg="#dbeafe", fg="#1e40af", anchor="center")
        self.lbl_message.pack(side=tk.TOP, fill=tk.X, padx=5, pady=5)

        # --- 3. CANVAS ---
        self.canvas = tk.Canvas(self.root, width=self.settings.canvas_width,
                                height=self.settings.canvas_height, bg="white")
        self.canvas.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        # --- 4. STATUS + CONSOLE ---
        self.lbl_status = tk.Label(self.root, text="", bg="#ddd", anchor="w")
        self.lbl_status.pack(side=tk.TOP, fill=tk.X)
        self.log_console = scrolledtext.ScrolledText(self.root, height=8, font=("Consolas", 9))
        self.log_console.pack(side=tk.BOTTOM, fill=tk.X)

    # --- Ações ---

    def insert_keys(self):
        if self.is_animating:
            return
        try:
            keys = parse_keys(self.entry.get())
        except ValueError as e:
            self.set_message(str(e))
            return
        self.entry.delete(0, tk.END)
        self.pending_keys = keys
        self.insert_next()

    def insert_next(self):
        if not self.pending_keys:
            self.finish_animation()
            return
        key = self.pending_keys.pop(0)
        before = self.tree.snapshot()
        self.recorder.clear_steps()
        self.recorder.log(f"Inserindo {key} na árvore AVL...")
        steps = self.tree.insert(key)
        self.player = StepPlayer.for_insert(before, self.tree.snapshot(), steps, self.settings)
        self.set_animating(True)
        self.draw_player_frame()
        self.set_message(f"Inserindo {key} na árvore AVL...")
        self.root.after(self.player.delay_ms, lambda: self.animate_insert(key))

    def animate_insert(self, key):
        if self.player.finished:
            self.draw_tree()
            self.set_message(f"Inserido {key} e árvore balanceada")
            self.update_console()
            self.root.after(self.player.delay_ms, self.insert_next)
            return
        self.player.next()
        self.draw_player_frame()
        self.root.after(self.player.delay_ms, lambda: self.animate_insert(key))

    # --- Revisão dos passos da última inserção ---

    def step_back(self):
        if self.is_animating or self.player is None:
            return
        self.player.prev()
        self.draw_player_frame()

    def step_forward(self):
        if self.is_animating or self.player is None:
            return
        self.player.next()
        self.draw_player_frame()

    def go_end(self):
        if self.is_animating or self.player is None:
            return
        self.player.go_end()
        self.draw_player_frame()

    def draw_player_frame(self):
        self.draw_snapshot(self.player.snapshot, self.player.highlights())
        self.set_message(self.player.message())

    def search_key(self):
        if self.is_animating:
            return
        try:
            key = parse_key(self.entry.get())
        except ValueError as e:
            self.set_message(str(e))
            return
        if self.tree.find(key):
            self.draw_tree(highlights={key: NodeState.HIGHLIGHT})
            self.set_message(f"{key} encontrado na árvore")
        else:
            self.draw_tree()
            self.set_message(f"{key} não está na árvore")
        self.recorder.log(self.lbl_message.cget("text"))
        self.update_console()

    def traverse(self):
        if self.is_animating or self.tree.root is None:
            return
        label = self.order_var.get()
        keys = list(self.tree.traverse(ORDER_LABELS[label]))
        frames = traversal_frames(keys)
        self.recorder.log(f"Percurso {label}: {', '.join(str(k) for k in keys)}")
        self.set_animating(True)
        self.animate_traversal(frames, 0, label, keys)

    def animate_traversal(self, frames, index, label, keys):
        if index >= len(frames):
            self.draw_tree()
            self.set_message(f"Percurso {label}: {', '.join(str(k) for k in keys)}")
            self.finish_animation()
            return
        self.draw_tree(highlights=frames[index])
        self.set_message(f"Visitando {keys[index]}")
        self.root.after(self.settings.delay_ms, lambda: self.animate_traversal(frames, index + 1, label, keys))

    def create_sample(self):
        if self.is_animating:
            return
        if self.tree.create_sample_tree():
            self.player = None
            self.set_message("Árvore AVL de exemplo criada")
        else:
            self.set_message("Limpe a árvore antes de criar o exemplo")
        self.draw_tree()

    def clear_tree(self):
        if self.is_animating:
            return
        self.tree.clear()
        self.player = None
        self.set_message("Árvore AVL limpa")
        self.draw_tree()

    def export_png(self):
        filepath = filedialog.asksaveasfilename(defaultextension=".png", filetypes=[("PNG", "*.png")])
        if not filepath:
            return
        self.renderer.save(self.tree.snapshot(), filepath, title="Árvore AVL")
        self.recorder.log(f"Imagem exportada para {filepath}")
        self.update_console()

    def on_speed_change(self, value):
        self.settings.speed = int(float(value))

    # --- Desenho ---

    def draw_tree(self, highlights=None):
        """Desenha o estado atual da árvore."""
        self.draw_snapshot(self.tree.snapshot(), highlights)

    def draw_snapshot(self, snapshot, highlights=None):
        """Desenha exatamente o snapshot recebido (None = árvore vazia)."""
        self.canvas.delete("all")
        highlights = highlights or {}
        s = self.settings

        if snapshot is None:
            self.canvas.create_text(s.canvas_width / 2, s.canvas_height / 2, fill="gray",
                                    text="A árvore AVL está vazia. Insira nós ou crie a árvore de exemplo.")
        else:
            positions = calculate_node_positions(snapshot, s)
            for (x1, y1), (x2, y2) in calculate_edges(positions, snapshot):
                self.canvas.create_line(x1, y1, x2, y2, fill="gray", width=2)
            r = s.node_radius
            for pos in positions:
                color = s.color_for(highlights.get(pos.key, NodeState.DEFAULT))
                self.canvas.create_oval(pos.x - r, pos.y - r, pos.x + r, pos.y + r,
                                        fill=color, outline="white", width=2)
                self.canvas.create_text(pos.x, pos.y - 5, text=str(pos.key), fill="white",
                                        font=("Arial", 10, "bold"))
                self.canvas.create_text(pos.x, pos.y + 8, text=f"BF: {pos.balance}", fill="white",
                                        font=("Arial", 7))

        ok, msg = validate_tree(self.tree)
        self.lbl_status.config(text=f"Nós: {len(self.tree)} | Altura: {AVLTree.height(self.tree.root)} | {msg}",
                               fg="black" if ok else "red")

    def set_message(self, text):
        self.lbl_message.config(text=text)

    def set_animating(self, value):
        self.is_animating = value
        for btn in self.buttons:
            btn.config(state=tk.DISABLED if value else tk.NORMAL)

    def finish_animation(self):
        self.set_animating(False)
        self.update_console()

    def update_console(self):
        self.log_console.delete(1.0, tk.END)
        for msg in reversed(self.recorder.logs):
            self.log_console.insert(tk.END, msg + "\n")


if __name__ == "__main__": root = tk.Tk(); app = AVLVisualizerApp(root); root.mainloop()
