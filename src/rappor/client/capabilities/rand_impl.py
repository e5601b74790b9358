"""
Randomness sources for the Instantaneous Randomized Response.

Responsibilities
  - NumpyIrrRand: seeded/reproducible masks from a numpy Generator.
  - SystemIrrRand: every mask bit drawn directly from OS entropy.

Limitations
  - NumpyIrrRand is reproducible by design when seeded, which is suitable for
    simulations and tests but not for production reporting.
"""
# 说明：IRR 阶段使用的带偏随机掩码生成器实现。
# 职责：
# - NumpyIrrRand：基于 numpy Generator 逐位采样，支持固定种子复现，内部加锁以便多线程共享
# - NumpyIrrRand.split：派生多个相互独立的随机源，便于模拟中每个客户端各持一条随机流
# - SystemIrrRand：每一位直接由操作系统熵源生成均匀数，读取失败或字节不足时抛出 RandomSourceError

from __future__ import annotations

import os
import threading
from typing import Callable, List, Optional

import numpy as np

from rappor.core.utils.param_validation import ensure
from rappor.core.utils.random import SeedLike, create_rng, split_rng
from ..errors import RandomSourceError
from .base import BaseIrrRand

# 每位消耗 7 字节熵，取高 53 位构造 [0, 1) 均匀浮点数
_BYTES_PER_BIT = 7
_RECIP_BPF = 2.0 ** -53


def _check_mask_args(probability: float, num_bits: int) -> None:
    ensure(0.0 <= probability <= 1.0, f"probability must be within [0, 1] (got {probability})")
    ensure(num_bits > 0, "num_bits must be positive")


def mask_from_generator(rng: np.random.Generator, probability: float, num_bits: int) -> int:
    """Draw ``num_bits`` independent Bernoulli(probability) bits into an int."""
    # 第 i 个均匀样本小于 probability 时置位第 i 位
    draws = rng.random(num_bits) < probability
    mask = 0
    for i in np.flatnonzero(draws):
        mask |= 1 << int(i)
    return mask


class NumpyIrrRand(BaseIrrRand):
    """IRR masks from a (optionally seeded) numpy Generator."""

    def __init__(self, seed: SeedLike = None):
        self._rng = create_rng(seed)
        self._lock = threading.Lock()

    def get_mask(self, probability: float, num_bits: int) -> int:
        _check_mask_args(probability, num_bits)
        # Generator 本身不是线程安全的，共享实例时串行化采样
        with self._lock:
            return mask_from_generator(self._rng, probability, num_bits)

    def split(self, num: int) -> List["NumpyIrrRand"]:
        """Derive `num` independent sources, e.g. one per simulated client."""
        with self._lock:
            return [NumpyIrrRand(child) for child in split_rng(self._rng, num)]


class SystemIrrRand(BaseIrrRand):
    """
    IRR masks drawn directly from ``os.urandom``.

    Each bit consumes 7 bytes of OS entropy turned into a 53-bit uniform
    float, the same construction as ``random.SystemRandom.random``.
    """

    def __init__(self, urandom: Optional[Callable[[int], bytes]] = None):
        self._urandom = urandom or os.urandom

    def get_mask(self, probability: float, num_bits: int) -> int:
        _check_mask_args(probability, num_bits)
        needed = _BYTES_PER_BIT * num_bits
        try:
            entropy = self._urandom(needed)
        except OSError as exc:
            raise RandomSourceError("failed to read from the OS entropy source") from exc
        if len(entropy) != needed:
            raise RandomSourceError(f"entropy source returned {len(entropy)} bytes, expected {needed}")

        mask = 0
        for i in range(num_bits):
            chunk = entropy[i * _BYTES_PER_BIT:(i + 1) * _BYTES_PER_BIT]
            uniform = (int.from_bytes(chunk, "big") >> 3) * _RECIP_BPF
            if uniform < probability:
                mask |= 1 << i
        return mask
