"""Capability interfaces consumed by the encoding pipeline."""
# 说明：编码流水线依赖的三类外部能力（摘要哈希、带密钥 MAC、带偏随机掩码）的抽象接口。
# 职责：
# - BaseHashFunction：对任意字节串给出确定性摘要，长度须不少于 num_hashes 字节
# - BaseMacFunction：以客户端密钥对消息生成恰好 32 字节的确定性摘要
# - BaseIrrRand：按给定概率生成 num_bits 位宽的独立随机掩码，失败时抛出异常而非降级
# 约定：流水线只依赖这些接口，更换加密后端无需改动编码阶段代码

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseHashFunction(ABC):
    """Deterministic digest over arbitrary bytes."""

    #: Registry name; also reported in encoder metadata.
    name: str = "hash"

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """Return the digest of ``data``."""
        raise NotImplementedError

    def __call__(self, data: bytes) -> bytes:
        return self.hash(data)


class BaseMacFunction(ABC):
    """Keyed, deterministic MAC producing a 32-byte digest."""

    name: str = "mac"

    @abstractmethod
    def mac(self, key: bytes, message: bytes) -> bytes:
        """Return MAC(key, message)."""
        raise NotImplementedError

    def __call__(self, key: bytes, message: bytes) -> bytes:
        return self.mac(key, message)


class BaseIrrRand(ABC):
    """
    Source of biased random bit masks for the Instantaneous Randomized Response.

    Implementations return an integer whose bit ``i`` (for ``i < num_bits``)
    is set independently with the given probability. Failures (e.g. an
    exhausted entropy source) must raise; they must never fall back to a
    weaker source.
    """

    @abstractmethod
    def get_mask(self, probability: float, num_bits: int) -> int:
        raise NotImplementedError
