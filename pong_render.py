"""Scene graph for a game state.

Shapes live in world coordinates: origin at the board center, y pointing
up. A drawing backend walks ``Scene.shapes`` in order (later shapes on
top) and only has to know how to fill a circle, fill a rectangle, place
text and shift a group.
"""

from dataclasses import dataclass, field
from typing import Tuple

from pong_logic import GAME_HEIGHT, GAME_WIDTH, HALF_HEIGHT, Phase

Color = Tuple[int, int, int]

FIELD_COLOR = (60, 100, 60)
WHITE = (255, 255, 255)
TEXT_COLOR = (160, 200, 160)

BALL_RADIUS = 7.5
PADDLE_WIDTH = 10
PADDLE_HEIGHT = 40

SCORE_SIZE = 32
MESSAGE_SIZE = 14
HUD_OFFSET = 40

MESSAGE = "SPACE to start, WS and arrows to move"


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: Color = WHITE


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    color: Color = WHITE


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str
    size: int = MESSAGE_SIZE
    color: Color = WHITE


@dataclass(frozen=True)
class Group:
    shapes: tuple = ()
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    shapes: tuple = field(default_factory=tuple)


def score_text(state):
    return f"{state.player1.score} - {state.player2.score}"


def render(state) -> Scene:
    ball = state.ball
    p1 = state.player1
    p2 = state.player2

    if state.phase == Phase.PAUSED:
        message = (Label(0, 0, MESSAGE, MESSAGE_SIZE, TEXT_COLOR),)
    else:
        message = ()

    shapes = (
        Rect(0, 0, GAME_WIDTH, GAME_HEIGHT, FIELD_COLOR),
        Circle(ball.x, ball.y, BALL_RADIUS),
        Rect(p1.x, p1.y, PADDLE_WIDTH, PADDLE_HEIGHT),
        Rect(p2.x, p2.y, PADDLE_WIDTH, PADDLE_HEIGHT),
        Group((Label(0, 0, score_text(state), SCORE_SIZE, TEXT_COLOR),),
              0, HALF_HEIGHT - HUD_OFFSET),
        Group(message, 0, HUD_OFFSET - HALF_HEIGHT),
    )
    return Scene(GAME_WIDTH, GAME_HEIGHT, shapes)
