import pyglet
from pyglet import shapes
from pyglet.window import key

from config import (GAME_TITLE, WINDOW_SIZE, MARGIN, LINE_THICKNESS,
                    PLAYER_COLORS, GRID_COLOR, BACKGROUND_COLOR)
from game_logic import Color


class SOSWindow(pyglet.window.Window):
    """
    Draws a Match and feeds it mouse/keyboard moves.
    Click a cell, then press S or O. N starts a new game.
    """

    def __init__(self, match, bot_delay=1.0, save_path=None):
        super().__init__(WINDOW_SIZE, WINDOW_SIZE + 50, caption=GAME_TITLE)
        self.match = match
        self.bot_delay = bot_delay
        self.save_path = save_path
        self.selected_cell = None
        self.bot_scheduled = False

        self.grid_size = WINDOW_SIZE - 2 * MARGIN
        self.cw = self.grid_size / match.board_size

        self.batch = pyglet.graphics.Batch()
        self.highlight_batch = pyglet.graphics.Batch()
        self.overlay_batch = pyglet.graphics.Batch()
        self.shapes = []
        self.letters = []
        self.lines = []
        self.highlight = None

        self.label = pyglet.text.Label('', font_name='Arial', font_size=20,
                                       x=10, y=self.height - 30)
        self.build_grid()
        self.refresh()

    # Geometry: row 0 is at the top of the window

    def cell_center(self, row, col):
        x = MARGIN + col * self.cw + self.cw / 2
        y = (WINDOW_SIZE - MARGIN) - row * self.cw - self.cw / 2
        return x, y

    def cell_at(self, x, y):
        col = int((x - MARGIN) // self.cw)
        row = int(((WINDOW_SIZE - MARGIN) - y) // self.cw)
        if 0 <= row < self.match.board_size and 0 <= col < self.match.board_size:
            return row, col
        return None

    def build_grid(self):
        n = self.match.board_size
        for i in range(n + 1):
            x = MARGIN + i * self.cw
            self.shapes.append(shapes.Line(x, MARGIN, x, WINDOW_SIZE - MARGIN,
                                           thickness=LINE_THICKNESS, color=GRID_COLOR, batch=self.batch))
            y = MARGIN + i * self.cw
            self.shapes.append(shapes.Line(MARGIN, y, WINDOW_SIZE - MARGIN, y,
                                           thickness=LINE_THICKNESS, color=GRID_COLOR, batch=self.batch))

    def refresh(self, new_move=False):
        """Redraws letters, sequence lines and the status label from the match."""
        for label in self.letters:
            label.delete()
        self.letters = []
        board = self.match.board
        font_size = max(12, int(self.cw * 0.45))
        for r, row in enumerate(board):
            for c, letter in enumerate(row):
                if letter:
                    x, y = self.cell_center(r, c)
                    self.letters.append(pyglet.text.Label(
                        letter, font_name='Arial', font_size=font_size, x=x, y=y,
                        anchor_x='center', anchor_y='center', batch=self.batch))

        if new_move and self.match.last_sequences:
            color = PLAYER_COLORS[self.last_mover().value.lower()]
            for s1, _, s2 in self.match.last_sequences:
                x1, y1 = self.cell_center(*s1)
                x2, y2 = self.cell_center(*s2)
                self.lines.append(shapes.Line(x1, y1, x2, y2, thickness=5,
                                              color=color, batch=self.overlay_batch))

        self.update_label()

    def last_mover(self):
        moves = self.match.moves
        return moves[-1].color if moves else self.match.turn

    def update_label(self):
        scores = self.match.scores
        text = f"Blue: {scores[Color.BLUE]} | Red: {scores[Color.RED]} | "
        if self.match.terminal:
            text += f"Game Over! {self.match.result_text()}"
        elif self.bot_scheduled:
            text += f"{self.match.turn.value} is thinking..."
        else:
            text += f"{self.match.turn.value}'s turn"
        self.label.text = text

    def highlight_cell(self, row, col):
        x, y = self.cell_center(row, col)
        size = self.cw * 0.9
        self.highlight = shapes.Rectangle(x - size / 2, y - size / 2, size, size,
                                          color=(80, 80, 80), batch=self.highlight_batch)

    # Turn handling

    def schedule_bot(self):
        if self.match.is_autonomous_turn() and not self.bot_scheduled:
            self.bot_scheduled = True
            self.update_label()
            pyglet.clock.schedule_once(self.execute_bot_move, self.bot_delay)

    def execute_bot_move(self, dt):
        self.bot_scheduled = False
        result = self.match.step()
        self.after_move(result)

    def after_move(self, result):
        self.refresh(new_move=result is not None and result.accepted)
        if self.match.terminal:
            if self.save_path:
                self.match.save_moves(self.save_path)
            print("Game Over!", self.match.result_text())
        else:
            self.schedule_bot()

    def new_game(self):
        pyglet.clock.unschedule(self.execute_bot_move)
        self.bot_scheduled = False
        self.match.reset()
        self.selected_cell = None
        self.highlight = None
        for line in self.lines:
            line.delete()
        self.lines = []
        self.refresh()
        self.schedule_bot()

    # Events

    def on_mouse_press(self, x, y, button, modifiers):
        if self.match.terminal or self.match.is_autonomous_turn():
            return
        cell = self.cell_at(x, y)
        if cell is not None and self.match.board[cell[0]][cell[1]] == '':
            self.selected_cell = cell
            self.highlight_cell(*cell)

    def on_key_press(self, symbol, modifiers):
        if symbol == key.N:
            self.new_game()
            return
        if symbol == key.ESCAPE:
            self.close()
            return
        if self.selected_cell is None or symbol not in (key.S, key.O):
            return

        letter = 'S' if symbol == key.S else 'O'
        row, col = self.selected_cell
        result = self.match.submit(row, col, letter)
        self.selected_cell = None
        self.highlight = None
        if result.accepted:
            self.after_move(result)

    def on_draw(self):
        pyglet.gl.glClearColor(*[v / 255 for v in BACKGROUND_COLOR], 1)
        self.clear()
        self.highlight_batch.draw()
        self.batch.draw()
        self.overlay_batch.draw()
        self.label.draw()


def run(match, bot_delay=1.0, save_path=None):
    window = SOSWindow(match, bot_delay=bot_delay, save_path=save_path)
    window.schedule_bot()
    pyglet.app.run()
