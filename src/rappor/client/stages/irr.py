"""Instantaneous Randomized Response stage."""
# 说明：IRR 阶段，每次上报向随机源申请两张独立掩码（概率 p 与 q），与 PRR 组合得到最终报告位。
# 约定：
# - 随机源任何失败都直接转为 RandomSourceError 抛出，不重试、不退化为弱随机
# - 掩码必须为不超过 num_bits 位宽的非负整数

from __future__ import annotations

from ..bits import Bits
from ..capabilities.base import BaseIrrRand
from ..errors import RandomSourceError
from ..params import Params


def _draw_mask(irr_rand: BaseIrrRand, probability: float, num_bits: int, label: str) -> Bits:
    try:
        mask = irr_rand.get_mask(probability, num_bits)
    except RandomSourceError:
        raise
    except Exception as exc:
        raise RandomSourceError(f"{label} mask failed: {exc}") from exc
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise RandomSourceError(f"{label} mask must be an int (got {type(mask).__name__})")
    if mask < 0 or mask >> num_bits:
        raise RandomSourceError(f"{label} mask does not fit in {num_bits} bits")
    return mask


def make_irr(prr: Bits, params: Params, irr_rand: BaseIrrRand) -> Bits:
    """
    Combine PRR with fresh p/q masks: ``(p & ~prr) | (q & prr)``.

    Raises:
        RandomSourceError: if either mask request fails.
    """
    p_bits = _draw_mask(irr_rand, params.prob_p, params.num_bits, "p")
    q_bits = _draw_mask(irr_rand, params.prob_q, params.num_bits, "q")
    return (p_bits & ~prr) | (q_bits & prr)
