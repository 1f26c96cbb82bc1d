# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 game session.

This module provides a Matplotlib window drawing the tiles of a game session, the score and the
game-over banner, and forwarding keyboard events to a handler.
"""
from collections.abc import Callable, Sequence

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event

from tiles2048.core.tile import GRID_SIZE, Tile


class WindowBoard:
    """
    A class for rendering the 2048 game board using Matplotlib.

    Methods
    -------
    show_tiles(tiles, score, best_score, game_over)
        Update the display with the current tiles.
    register_key_handler(key_handler: Callable)
        Register a function to handle keyboard events.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        0: "#CDC1B4",
        2: "#EEE4DA",
        4: "#EDE0C8",
        8: "#F2B179",
        16: "#F59563",
        32: "#F67C5F",
        64: "#F65E3B",
        128: "#EDCF72",
        256: "#EDCC61",
        512: "#EDC850",
        1024: "#EDC53F",
        2048: "#EDC22E",
    }
    DARK_TEXT = "#776E65"
    LIGHT_TEXT = "#F9F6F2"
    HIGHLIGHT = "#8F7A66"

    def __init__(self, title: str):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            The title of the window.
        """
        self.fig, self.axe = plt.subplots()
        self.fig.canvas.manager.set_window_title(title)
        self._setup_axes()
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self):
        """Create one subplot per cell and an overlay text for the game-over banner."""
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=0.92, wspace=0.05, hspace=0.05)
        self.axe.set_facecolor("#BBADA0")
        self.axe.set_xticks([])
        self.axe.set_yticks([])

        self.texts = []
        self.axes = [
            self.fig.add_subplot(GRID_SIZE, GRID_SIZE, r * GRID_SIZE + c + 1)
            for r in range(GRID_SIZE)
            for c in range(GRID_SIZE)
        ]
        for ax in self.axes:
            text = ax.text(0.5, 0.5, "", ha="center", va="center", fontsize="x-large", fontweight="demibold")
            self.texts.append(text)
            ax.set_xticks([])
            ax.set_yticks([])

        self.banner = self.fig.text(0.5, 0.46, "", ha="center", va="center", fontsize="xx-large", fontweight="bold")

    def _close_handler(self, event: Event | None = None):
        """Set the closed flag when the window is closed."""
        self.closed = True

    def show_tiles(self, tiles: Sequence[Tile], score: int, best_score: int, game_over: bool = False):
        """
        Show or update the game board.

        Parameters
        ----------
        tiles : Sequence[Tile]
            Tiles to draw.
        score : int
            Current score, shown in the title.
        best_score : int
            Best score, shown in the title.
        game_over : bool, optional
            Whether to display the game-over banner (default is False).

        Notes
        -----
        - Tiles flagged ``is_new`` or ``is_merging`` get a highlighted edge.
        """
        by_cell = {tile.position: tile for tile in tiles}
        for index, (ax, text) in enumerate(zip(self.axes, self.texts)):
            tile = by_cell.get(divmod(index, GRID_SIZE))
            value = tile.value if tile else 0
            text.set_text(str(value) if value else "")
            text.set_color(self.DARK_TEXT if value <= 4 else self.LIGHT_TEXT)
            ax.set_facecolor(self.COLORS.get(value, self.COLORS[2048]))

            highlighted = tile is not None and (tile.is_new or tile.is_merging)
            for spine in ax.spines.values():
                spine.set_edgecolor(self.HIGHLIGHT if highlighted else "black")
                spine.set_linewidth(3 if highlighted else 1)

        self.fig.suptitle(f"SCORE {score}    BEST {best_score}")
        self.banner.set_text("Game Over!" if game_over else "")

        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()
        plt.pause(0.001)

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function called with every key press event of the window.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """Close the window and set the closed flag."""
        plt.close(self.fig)
        self.closed = True
