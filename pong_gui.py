import sys
import argparse
from PyQt6 import QtWidgets, QtCore, QtGui
from pong_game import PongGame
from pong_render import Circle, Rect, Label, Group

FPS = 60
SCALE = 1.5

KEY_NAMES = {
    QtCore.Qt.Key.Key_Space.value: " ",
    QtCore.Qt.Key.Key_Up.value: "ArrowUp",
    QtCore.Qt.Key.Key_Down.value: "ArrowDown",
    QtCore.Qt.Key.Key_Left.value: "ArrowLeft",
    QtCore.Qt.Key.Key_Right.value: "ArrowRight",
    QtCore.Qt.Key.Key_Escape.value: "Escape",
}


LETTERS = range(QtCore.Qt.Key.Key_A.value, QtCore.Qt.Key.Key_Z.value + 1)
DIGITS = range(QtCore.Qt.Key.Key_0.value, QtCore.Qt.Key.Key_9.value + 1)


def key_name(key, text):
    # letters and digits go by key code, their text changes with modifiers
    key = int(key)
    name = KEY_NAMES.get(key)
    if name is not None:
        return name
    if key in LETTERS or key in DIGITS:
        return chr(key).lower()
    if text and text.isprintable() and not text.isspace():
        return text.lower()
    return None


class GameWidget(QtWidgets.QWidget):
    def __init__(self, game, fps=FPS):
        super().__init__()
        self.game = game
        self.scene = game.scene()
        self.setMinimumSize(self.scene.width // 2, self.scene.height // 2)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

        self.clock = QtCore.QElapsedTimer()
        self.timer = QtCore.QTimer(self)
        self.timer.setTimerType(QtCore.Qt.TimerType.PreciseTimer)
        self.timer.timeout.connect(self.on_tick)
        self.interval = max(1, round(1000 / fps))

    def start(self):
        self.clock.start()
        self.timer.start(self.interval)

    def on_tick(self):
        elapsed = self.clock.nsecsElapsed() / 1e6
        self.clock.restart()
        self.scene = self.game.tick(elapsed)
        self.update()

    def keyPressEvent(self, e):
        if e.isAutoRepeat():
            return
        k = key_name(e.key(), e.text())
        if k is None:
            super().keyPressEvent(e)
            return
        self.game.key_down(k)

    def keyReleaseEvent(self, e):
        if e.isAutoRepeat():
            return
        k = key_name(e.key(), e.text())
        if k is None:
            super().keyReleaseEvent(e)
            return
        self.game.key_up(k)

    def focusOutEvent(self, e):
        self.game.release_all()
        super().focusOutEvent(e)

    def paintEvent(self, event):
        qp = QtGui.QPainter(self)
        qp.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        qp.fillRect(self.rect(), QtGui.QColor(25, 25, 25))

        sc = self.scene
        s = min(self.width() / sc.width, self.height() / sc.height)

        qp.translate(self.width() / 2, self.height() / 2)
        qp.setPen(QtCore.Qt.PenStyle.NoPen)
        for shape in sc.shapes:
            self.draw(qp, shape, s)
        qp.end()

    def draw(self, qp, shape, s):
        # world y points up, screen y points down
        x = shape.x * s
        y = -shape.y * s

        if isinstance(shape, Group):
            qp.save()
            qp.translate(x, y)
            for child in shape.shapes:
                self.draw(qp, child, s)
            qp.restore()

        elif isinstance(shape, Rect):
            w = shape.width * s
            h = shape.height * s
            qp.fillRect(QtCore.QRectF(x - w / 2, y - h / 2, w, h), QtGui.QColor(*shape.color))

        elif isinstance(shape, Circle):
            r = shape.radius * s
            qp.setBrush(QtGui.QColor(*shape.color))
            qp.drawEllipse(QtCore.QPointF(x, y), r, r)

        elif isinstance(shape, Label):
            size = max(1, round(shape.size * s))
            font = QtGui.QFont("Arial")
            font.setPixelSize(size)
            qp.save()
            qp.setFont(font)
            qp.setPen(QtGui.QColor(*shape.color))
            box = QtCore.QRectF(x - self.width() / 2, y - size, self.width(), 2 * size)
            qp.drawText(box, QtCore.Qt.AlignmentFlag.AlignCenter, shape.text)
            qp.restore()


class MainWindow(QtWidgets.QWidget):
    def __init__(self, fps=FPS, scale=SCALE):
        super().__init__()
        self.game = PongGame()
        self.game_widget = GameWidget(self.game, fps)

        self.setWindowTitle("PONG")
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.game_widget)

        sc = self.game_widget.scene
        self.resize(round(sc.width * scale), round(sc.height * scale))
        self.game_widget.setFocus()

    def showEvent(self, e):
        super().showEvent(e)
        if not self.game_widget.timer.isActive():
            self.game_widget.start()

    def closeEvent(self, e):
        self.game_widget.timer.stop()
        print(f"[pong gui] closed # final score {self.game.state.player1.score} - {self.game.state.player2.score}")
        e.accept()


def positive(value):
    try:
        v = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if v <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be positive")
    return v


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Two-player Pong")
    parser.add_argument("--fps", type=positive, default=FPS, help="tick rate of the frame timer")
    parser.add_argument("--scale", type=positive, default=SCALE, help="initial window scale")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    app = QtWidgets.QApplication(sys.argv[:1])
    w = MainWindow(args.fps, args.scale)
    w.show()
    print(f"[pong gui] window {w.width()}x{w.height()} # {args.fps:g} fps")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
