import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from scene.context import Ctx


class FakeCodec:
    """Deterministic stand-in: content only at a few angles, sized by `sizes`."""

    def __init__(self, sizes=None):
        self.sizes = sizes if sizes is not None else {0: (3, 2), 5: (4, 1), 9: (2, 2)}
        self.encode_calls = []
        self.decode_calls = []

    def encode(self, surface, base_angle):
        self.encode_calls.append((len(surface), base_angle))
        return {angle: f"content-{angle}" for angle in self.sizes}

    def decode(self, angle, content):
        assert content == f"content-{angle}"
        self.decode_calls.append(angle)
        n_emu, n_led = self.sizes[angle]
        emu = np.column_stack([np.full(n_emu, angle / 100.0), np.arange(n_emu) / 10.0, np.zeros(n_emu)])
        led = np.column_stack([np.full(n_led, angle / 100.0), np.arange(n_led) / 10.0, np.ones(n_led)])
        return emu, led


@pytest.fixture
def fake_codec():
    return FakeCodec()


@pytest.fixture
def fake_ctx(fake_codec):
    return Ctx.build(codec=fake_codec)


@pytest.fixture
def fake_codec_cls():
    return FakeCodec
