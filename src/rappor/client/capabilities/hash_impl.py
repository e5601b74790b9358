"""
Concrete hash and MAC collaborators.

Responsibilities
  - MD5 digest (the classic RAPPOR Bloom filter hash, 16 bytes).
  - xxhash XXH3-128 and MurmurHash3 x64-128 digests as fast alternatives.
  - HMAC-SHA256 for the Permanent Randomized Response.

Usage Context
  - Plugged into Deps; the encoder only relies on the base interfaces.
"""
# 说明：具体的哈希 / MAC 协作方实现，均输出确定性字节摘要。
# 职责：
# - Md5Hash：hashlib MD5，16 字节摘要，可支持最多 16 个 Bloom 哈希
# - Xxh128Hash / Mmh3Hash：基于 xxhash 与 mmh3 的 128 位非加密哈希，同样提供 16 字节摘要
# - HmacSha256：hmac + SHA-256，32 字节摘要，供 PRR 每位消耗一个字节

from __future__ import annotations

import hashlib
import hmac

import mmh3
import xxhash

from .base import BaseHashFunction, BaseMacFunction


class Md5Hash(BaseHashFunction):
    name = "md5"

    def hash(self, data: bytes) -> bytes:
        return hashlib.md5(data).digest()


class Xxh128Hash(BaseHashFunction):
    """XXH3 128-bit digest, big-endian canonical form."""

    name = "xxh128"

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def hash(self, data: bytes) -> bytes:
        return xxhash.xxh3_128(data, seed=self.seed).digest()


class Mmh3Hash(BaseHashFunction):
    """MurmurHash3 x64 128-bit digest."""

    name = "mmh3"

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def hash(self, data: bytes) -> bytes:
        # mmh3 的 seed 为无符号 32 位整数
        return mmh3.hash_bytes(data, self.seed & 0xFFFFFFFF)


class HmacSha256(BaseMacFunction):
    name = "hmac_sha256"

    def mac(self, key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, hashlib.sha256).digest()
