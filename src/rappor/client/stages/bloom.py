"""Bloom filter stage: deterministic (cohort, value) -> k-bit sketch."""
# 说明：以 4 字节大端 cohort 前缀加原始值作为哈希输入，调用一次哈希能力，
#       用摘要前 num_hashes 个字节各自对 num_bits 取模决定置位位置。
# 约定：同一 (value, cohort) 与同一哈希实现下输出完全确定；重复位置自然合并

from __future__ import annotations

from ..bits import Bits
from ..capabilities.base import BaseHashFunction
from ..errors import HashOutputError
from ..params import Params


def bloom_hash_input(value: bytes, cohort: int) -> bytes:
    """Hash input buffer: cohort as 4-byte big-endian, then the raw value."""
    return cohort.to_bytes(4, "big") + value


def make_bloom_filter(value: bytes, cohort: int, params: Params, hash_func: BaseHashFunction) -> Bits:
    """
    Build the Bloom filter bits for ``value`` in ``cohort``.

    Raises:
        HashOutputError: if the hash function fails, returns something other
            than bytes, or returns fewer than ``params.num_hashes`` bytes.
    """
    data = bloom_hash_input(value, cohort)
    try:
        digest = hash_func.hash(data)
    except HashOutputError:
        raise
    except Exception as exc:
        raise HashOutputError(f"hash function failed: {exc}") from exc
    if not isinstance(digest, (bytes, bytearray)):
        raise HashOutputError(f"hash function must return bytes (got {type(digest).__name__})")
    if len(digest) < params.num_hashes:
        raise HashOutputError(
            f"hash function didn't return enough bytes ({len(digest)} < {params.num_hashes})"
        )

    bloom = 0
    for i in range(params.num_hashes):
        bloom |= 1 << (digest[i] % params.num_bits)
    return bloom
