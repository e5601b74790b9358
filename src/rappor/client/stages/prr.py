"""
Permanent Randomized Response stage.

Each report bit consumes one byte of HMAC(client_secret, value): the low bit
is the "uniform" replacement bit, the remaining 7 bits decide whether the
position is noisy (``rand128 < round(prob_f * 128)``). The result depends only
on the value, the secret and prob_f, so the same client reporting the same
value always produces the same PRR.
"""
# 说明：PRR 阶段，基于客户端密钥的 HMAC 摘要生成 uniform 位与 f 掩码，并与 Bloom 位组合。
# 约定：
# - 纯函数，不使用任何新鲜随机性，保证同一客户端同一取值的 PRR 在多次上报间保持不变
# - MAC 输出必须恰好 32 字节，否则视为协作方异常

from __future__ import annotations

import math
from typing import Tuple

from ..bits import MAC_DIGEST_SIZE, Bits
from ..capabilities.base import BaseMacFunction
from ..errors import MacOutputError
from ..params import Params


def prr_threshold(prob_f: float) -> int:
    """``prob_f * 128`` rounded half-up; compared against 7 bits of entropy."""
    return int(math.floor(prob_f * 128 + 0.5))


def get_prr_masks(
    value: bytes,
    client_secret: bytes,
    params: Params,
    hmac_func: BaseMacFunction,
) -> Tuple[Bits, Bits]:
    """
    Return ``(uniform, f_mask)`` derived from HMAC(client_secret, value).

    Raises:
        MacOutputError: if the MAC fails, returns something other than bytes,
            or the digest is not exactly 32 bytes.
    """
    try:
        digest = hmac_func.mac(client_secret, value)
    except MacOutputError:
        raise
    except Exception as exc:
        raise MacOutputError(f"MAC function failed: {exc}") from exc
    if not isinstance(digest, (bytes, bytearray)):
        raise MacOutputError(f"MAC function must return bytes (got {type(digest).__name__})")
    if len(digest) != MAC_DIGEST_SIZE:
        raise MacOutputError(
            f"MAC output length mismatch (got {len(digest)} bytes, expected {MAC_DIGEST_SIZE})"
        )

    threshold128 = prr_threshold(params.prob_f)
    uniform = 0
    f_mask = 0
    for i in range(params.num_bits):
        byte = digest[i]
        uniform |= (byte & 0x01) << i
        rand128 = byte >> 1
        if rand128 < threshold128:
            f_mask |= 1 << i
    return uniform, f_mask


def make_prr(bloom: Bits, uniform: Bits, f_mask: Bits, num_bits: int) -> Bits:
    """Keep Bloom bits where not noisy, uniform bits where noisy."""
    full = (1 << num_bits) - 1
    return ((bloom & ~f_mask) | (uniform & f_mask)) & full
