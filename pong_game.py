from dataclasses import replace

from pong_logic import Phase, derive_input, initial_state, step
from pong_render import render, score_text


class PongGame:
    """Owns the current state and turns key / tick events into scenes."""

    def __init__(self, state=None, verbose=True):
        self.state = state if state is not None else initial_state()
        self.verbose = verbose

    def key_down(self, key):
        if not key:
            return
        self.state = replace(self.state, keys_held=self.state.keys_held | {key})

    def key_up(self, key):
        if not key or key not in self.state.keys_held:
            return
        self.state = replace(self.state, keys_held=self.state.keys_held - {key})

    def release_all(self):
        if self.state.keys_held:
            self.state = replace(self.state, keys_held=frozenset())

    def tick(self, elapsed_ms):
        old = self.state
        self.state = step(old, derive_input(old.keys_held, elapsed_ms))
        self.report(old, self.state)
        return render(self.state)

    def scene(self):
        return render(self.state)

    def report(self, old, new):
        if not self.verbose:
            return
        if (old.player1.score, old.player2.score) != (new.player1.score, new.player2.score):
            print(f"[pong core] point # score {score_text(new)}")
        if old.phase != new.phase:
            if new.phase == Phase.PLAYING:
                print(f"[pong core] serve # ball {new.to_dict()['ball']}")
            else:
                print("[pong core] paused")
