"""
Seedable pseudo-random stream used for reproducible stipple placement.

The generator is mulberry32: a 32-bit counter advanced by a fixed odd
increment and scrambled by two xor-shift/multiply rounds. Outputs match the
reference JavaScript implementation bit for bit, so the same seed always
yields the same initial stipple layout.
"""

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a, b):
    """Low 32 bits of a * b (JavaScript Math.imul, unsigned)"""
    return (a * b) & _MASK32


class Mulberry32:
    """
    Deterministic stream of floats in [0, 1)

    Args:
        seed: Any integer; reduced modulo 2**32
    """

    def __init__(self, seed):
        self.seed = int(seed)
        self._state = self.seed & _MASK32

    @property
    def state(self):
        return self._state

    def next(self):
        """Advance the state and return the next value in [0, 1)"""
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def __call__(self):
        return self.next()

    def __iter__(self):
        return self

    def __next__(self):
        return self.next()

    def __repr__(self):
        return f"Mulberry32(seed={self.seed}, state=0x{self._state:08x})"
