"""Test doubles shared across gesturebank tests."""

import numpy as np

from gesturebank.types import FRAME_COUNT, FRAME_DIM


class ScriptedSource:
    """Landmark source replaying a fixed script of snapshots.

    The script is cycled; ``None`` entries mean "no hand visible".
    """

    def __init__(self, script=None):
        self._script = list(script) if script is not None else [None]
        self.reads = 0

    def current_snapshot(self):
        snapshot = self._script[self.reads % len(self._script)]
        self.reads += 1
        return snapshot


class FakeSleep:
    """Records requested sleeps instead of sleeping."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class HookSampler:
    """Sampler stand-in that runs a hook during selected captures."""

    def __init__(self, hook=None, on_capture=None):
        self._hook = hook
        self._on_capture = on_capture or {1}
        self.captures = 0

    def capture(self):
        self.captures += 1
        if self._hook is not None and self.captures in self._on_capture:
            self._hook()
        return np.zeros((FRAME_COUNT, FRAME_DIM))
