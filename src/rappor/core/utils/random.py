"""
Random number generation helpers.

Responsibilities
  - Centralize RNG creation and seeding for the IRR randomness sources.
  - Provide reproducible splits for simulations running many clients.

Limitations
  - Relies on numpy Generator behavior for reproducibility.
"""
# 说明：随机数生成辅助工具，用于在库中统一管理 IRR 随机源所需 RNG 的创建与派生。
# 职责：
# - create_rng：集中封装 numpy Generator 的创建逻辑，支持显式种子与已有生成器
# - split_rng：从单一 RNG 派生出多个独立生成器，便于模拟多客户端时分别持有随机流

from __future__ import annotations

from typing import List, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def create_rng(seed: SeedLike = None) -> np.random.Generator:
    """Create a numpy Generator from a seed, SeedSequence, or existing generator."""
    # 将输入规范化为 numpy.random.Generator；若已是 Generator 则直接返回
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def split_rng(rng: np.random.Generator, num: int) -> List[np.random.Generator]:
    """Split an RNG into `num` independent generators."""
    # 基于底层 SeedSequence.spawn 从单一 RNG 派生出 num 个彼此独立的生成器
    if num <= 0:
        raise ValueError("num must be positive")
    seeds = rng.bit_generator._seed_seq.spawn(num)  # type: ignore[attr-defined]
    return [np.random.default_rng(seed) for seed in seeds]
