from dataclasses import dataclass, field, replace
from enum import Enum

GAME_WIDTH = 600
GAME_HEIGHT = 400
HALF_WIDTH = GAME_WIDTH / 2
HALF_HEIGHT = GAME_HEIGHT / 2

BALL_SPEED = 200
PADDLE_SPEED = 200

PADDLE_OFFSET = 20       # paddle x distance from its wall
PADDLE_HIT_HALF_W = 8
PADDLE_HIT_HALF_H = 20
PADDLE_MARGIN = 22       # paddle y clamp margin
BALL_MARGIN = 7          # floor / ceiling bounce margin

KEY_SERVE = " "
KEY_P1_UP = "w"
KEY_P1_DOWN = "s"
KEY_P2_UP = "ArrowUp"
KEY_P2_DOWN = "ArrowDown"


def limit(v, a, b):
    return max(a, min(b, v))


class Phase(Enum):
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class MovingBody:
    x: float
    y: float
    vx: float
    vy: float


@dataclass(frozen=True)
class Ball(MovingBody):
    pass


@dataclass(frozen=True)
class Player(MovingBody):
    score: int = 0


@dataclass(frozen=True)
class Input:
    request_start: bool
    paddle1_dir: int
    paddle2_dir: int
    elapsed_ms: float


@dataclass(frozen=True)
class GameState:
    phase: Phase
    ball: Ball
    player1: Player
    player2: Player
    keys_held: frozenset = field(default_factory=frozenset)

    def to_dict(self):
        return {
            'phase': self.phase.value,
            'ball': {'x': self.ball.x, 'y': self.ball.y},
            'paddles': [self.player1.y, self.player2.y],
            'scores': [self.player1.score, self.player2.score],
            'keys': sorted(self.keys_held),
        }


def player_at(x):
    return Player(x=x, y=0.0, vx=0.0, vy=0.0, score=0)


def initial_state():
    return GameState(
        phase=Phase.PAUSED,
        ball=Ball(x=0.0, y=0.0, vx=BALL_SPEED, vy=BALL_SPEED),
        player1=player_at(PADDLE_OFFSET - HALF_WIDTH),
        player2=player_at(HALF_WIDTH - PADDLE_OFFSET),
    )


def key_direction(keys_held, up_key, down_key):
    # down wins when both are held
    if down_key in keys_held:
        return -1
    if up_key in keys_held:
        return 1
    return 0


def derive_input(keys_held, elapsed_ms) -> Input:
    return Input(
        request_start=KEY_SERVE in keys_held,
        paddle1_dir=key_direction(keys_held, KEY_P1_UP, KEY_P1_DOWN),
        paddle2_dir=key_direction(keys_held, KEY_P2_UP, KEY_P2_DOWN),
        elapsed_ms=elapsed_ms,
    )


def integrate(body: MovingBody, vx, vy, elapsed_ms):
    """Position of ``body`` after moving at (vx, vy) for ``elapsed_ms``."""
    seconds = elapsed_ms / 1000
    return body.x + vx * seconds, body.y + vy * seconds


def near(center, radius, value):
    return center - radius <= value <= center + radius


def within_paddle(ball: Ball, player: Player) -> bool:
    return (near(player.x, PADDLE_HIT_HALF_W, ball.x)
            and near(player.y, PADDLE_HIT_HALF_H, ball.y))


def advance_ball(elapsed_ms, ball: Ball, player1: Player, player2: Player) -> Ball:
    """Bounce the ball off paddles and walls, then move it.

    A ball outside the field is put back at the center and keeps its
    velocity. Bounces set the sign of a velocity component from where the
    ball is, not by negating it.
    """
    if not near(0, HALF_WIDTH, ball.x):
        return replace(ball, x=0.0, y=0.0)

    if within_paddle(ball, player1):
        vx = abs(ball.vx)
    elif within_paddle(ball, player2):
        vx = -abs(ball.vx)
    else:
        vx = ball.vx

    if ball.y < BALL_MARGIN - HALF_HEIGHT:
        vy = abs(ball.vy)
    elif ball.y > HALF_HEIGHT - BALL_MARGIN:
        vy = -abs(ball.vy)
    else:
        vy = ball.vy

    x, y = integrate(ball, vx, vy, elapsed_ms)
    return replace(ball, x=x, y=y, vx=vx, vy=vy)


def advance_player(elapsed_ms, direction, points, player: Player) -> Player:
    vy = direction * PADDLE_SPEED
    _, y = integrate(player, player.vx, vy, elapsed_ms)
    y = limit(y, PADDLE_MARGIN - HALF_HEIGHT, HALF_HEIGHT - PADDLE_MARGIN)
    return replace(player, y=y, vy=vy, score=player.score + points)


def step(state: GameState, inp: Input) -> GameState:
    ball = state.ball
    score1 = 1 if ball.x > HALF_WIDTH else 0
    score2 = 1 if ball.x < -HALF_WIDTH else 0

    if inp.request_start:
        phase = Phase.PLAYING
    elif score1 != score2:
        phase = Phase.PAUSED
    else:
        phase = state.phase

    # the ball freezes on the phase the tick started in
    if state.phase == Phase.PAUSED:
        new_ball = ball
    else:
        new_ball = advance_ball(inp.elapsed_ms, ball, state.player1, state.player2)

    return replace(
        state,
        phase=phase,
        ball=new_ball,
        player1=advance_player(inp.elapsed_ms, inp.paddle1_dir, score1, state.player1),
        player2=advance_player(inp.elapsed_ms, inp.paddle2_dir, score2, state.player2),
    )
