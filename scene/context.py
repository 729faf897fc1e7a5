# scene/context.py
# Build-once store of everything the renderer needs per mirror angle.
#
# The codec runs exactly once per process: the first get_ctx()/init_ctx()
# call encodes the canonical surface and decodes every angle under a lock.
# After that the context is immutable and read without locking.

import threading
import time
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from codec.codec import Codec
from codec.geometry import TOTAL_ANGLES, VOLUME_Z_OFFSET
from codec.surface import surface_to_points
from scene.primitives import MIRROR_LENGTH, Mirror, Screen
from scene.pyramid import gen_pyramid_surface
from utils.debug import log_debug

SCREEN_COUNT = 3


def _frozen(points) -> np.ndarray:
    arr = np.array(points, dtype=float).reshape(-1, 3)
    arr.setflags(write=False)
    return arr


def _concat(clouds) -> np.ndarray:
    if not clouds:
        return _frozen(np.empty((0, 3)))
    return _frozen(np.concatenate(clouds, axis=0))


@dataclass(frozen=True)
class AngleCtx:
    mirror: Mirror
    led_points: np.ndarray
    emu_points: np.ndarray


@dataclass(frozen=True)
class Ctx:
    angle_ctx_map: MappingProxyType
    all_real: np.ndarray
    all_emu: np.ndarray
    all_led: np.ndarray
    screens: tuple

    @classmethod
    def build(cls, codec=None, surface=None):
        """Run the codec over every angle and freeze the result."""
        codec = codec if codec is not None else Codec()
        surface = surface if surface is not None else gen_pyramid_surface()

        real = surface_to_points(surface)
        real[:, 2] -= VOLUME_Z_OFFSET

        angle_map = codec.encode(surface, 0)

        angle_ctx_map = {}
        emu_clouds, led_clouds = [], []
        for angle in range(TOTAL_ANGLES):
            mirror = Mirror(MIRROR_LENGTH, angle)
            content = angle_map.get(angle)
            if content is None:
                angle_ctx_map[angle] = AngleCtx(mirror, _frozen(np.empty((0, 3))), _frozen(np.empty((0, 3))))
                continue
            emu, led = codec.decode(angle, content)
            emu, led = _frozen(emu), _frozen(led)
            emu_clouds.append(emu)
            led_clouds.append(led)
            angle_ctx_map[angle] = AngleCtx(mirror, led, emu)

        return cls(
            angle_ctx_map=MappingProxyType(angle_ctx_map),
            all_real=_frozen(real),
            all_emu=_concat(emu_clouds),
            all_led=_concat(led_clouds),
            screens=tuple(Screen(idx) for idx in range(SCREEN_COUNT)),
        )

    def angle(self, angle) -> AngleCtx:
        """Only plain ints in 0..TOTAL_ANGLES-1 exist; anything else is a caller bug."""
        # exact int: True and 5.0 hash like 1 and 5
        if type(angle) is not int:
            raise KeyError(angle)
        return self.angle_ctx_map[angle]

    def stats(self):
        lit = sum(1 for a in self.angle_ctx_map.values() if len(a.emu_points))
        return {
            "angles": len(self.angle_ctx_map),
            "lit_angles": lit,
            "real": int(self.all_real.shape[0]),
            "emu": int(self.all_emu.shape[0]),
            "led": int(self.all_led.shape[0]),
        }


# -------- Process-wide instance ----------------------------------------------

_ctx = None
_ctx_lock = threading.Lock()


def init_ctx():
    """Build the shared context if nobody has yet. Safe to call from any thread."""
    global _ctx
    with _ctx_lock:
        if _ctx is None:
            t0 = time.time()
            log_debug(f"🧮 Building angle context ({TOTAL_ANGLES} angles)…")
            ctx = Ctx.build()
            s = ctx.stats()
            log_debug(
                f"✅ Context ready in {time.time() - t0:.2f}s: "
                f"{s['lit_angles']}/{s['angles']} angles lit, "
                f"real={s['real']} emu={s['emu']} led={s['led']}",
                level="MINIMAL",
            )
            _ctx = ctx
    return _ctx


def get_ctx() -> Ctx:
    ctx = _ctx
    if ctx is not None:
        return ctx
    return init_ctx()
