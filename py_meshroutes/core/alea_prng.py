"""
Alea pseudo-random number generator.

Based on Johannes Baagøe's Alea algorithm. Every random decision in the
route generator (candidate placement in the sampler, waypoint removal in the
extractor) is drawn from an instance of this class so that a run can be
replayed exactly from its seed.
"""

import os


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def entropy_seed() -> str:
    """Seed string drawn from OS entropy, for non-reproducible runs."""
    return os.urandom(8).hex()


class AleaPRNG:
    """
    Seedable Alea generator producing floats in [0, 1).

    Two instances built from the same seed yield the same sequence.
    A seed of ``None`` draws one from OS entropy; the chosen value is kept
    on ``self.seed`` so that a run can be reported and reproduced.
    """

    def __init__(self, seed=None):
        if seed is None:
            seed = entropy_seed()
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self):
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Random float in [low, high)."""
        return low + self.random() * (high - low)

    def randint(self, low: int, high: int) -> int:
        """Random integer in the inclusive range [low, high]."""
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        return low + int(self.random() * (high - low + 1))

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]


# Process-wide default PRNG, used when a caller does not inject its own
_prng = None


def set_random_seed(seed=None) -> AleaPRNG:
    """
    Reset the default PRNG.

    Args:
        seed: Seed string, or None to draw a fresh seed from OS entropy

    Returns:
        The new default AleaPRNG instance
    """
    global _prng
    _prng = AleaPRNG(seed)
    return _prng


def get_prng() -> AleaPRNG:
    """Get the default PRNG, creating an entropy-seeded one on first use."""
    global _prng
    if _prng is None:
        _prng = AleaPRNG()
    return _prng
