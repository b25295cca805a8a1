"""Sampled audio clips that mix into an output buffer."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

_HEADER = struct.Struct("<i?i")


@dataclass
class Clip:
    """Mono samples with a play position; a replaying clip loops."""

    sample_rate: int = 0
    samples: list = field(default_factory=list)
    replay: bool = False
    position: int = 0

    def __len__(self) -> int:
        return len(self.samples)

    @classmethod
    def load(cls, path) -> Clip:
        """Read a clip file written by :meth:`save`."""
        data = Path(path).read_bytes()
        if len(data) < _HEADER.size:
            raise ValueError("clip file is truncated")
        sample_rate, replay, count = _HEADER.unpack_from(data)
        body = data[_HEADER.size:]
        if count < 0 or len(body) < 8 * count:
            raise ValueError("clip file is truncated")
        samples = list(struct.unpack_from(f"<{count}d", body))
        return cls(sample_rate=sample_rate, samples=samples, replay=replay)

    def save(self, path) -> None:
        data = _HEADER.pack(self.sample_rate, self.replay, len(self.samples))
        data += struct.pack(f"<{len(self.samples)}d", *self.samples)
        Path(path).write_bytes(data)

    def play(self, buffer: list, volume: float = 1.0) -> None:
        """Add the next samples, scaled by volume, onto buffer in place."""
        n = len(self.samples)
        for i in range(len(buffer)):
            if self.position >= n:
                return
            buffer[i] += self.samples[self.position] * volume
            self.position += 1
            if self.position == n and self.replay:
                self.position = 0