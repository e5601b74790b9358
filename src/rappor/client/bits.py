"""Bit-vector helpers shared by the encoding stages."""
# 说明：RAPPOR 报告位向量在整数形式与大端字节形式之间的转换工具，以及位统计辅助函数。
# 职责：
# - 定义 Bits 类型别名与位宽 / 哈希数量上限等常量
# - 在整数与大端字节序列、bitarray 之间进行无损转换
# - 提供置位索引提取与置位计数等调试辅助

from __future__ import annotations

from typing import List, Union

from bitarray import bitarray

from rappor.core.utils.param_validation import ParamValidationError, ensure_type

Bits = int
# 报告位向量的整数表示，第 i 位对应 Bloom filter 的第 i 个位置

# PRR 对每一位消耗 HMAC-SHA256 输出中的一个字节，SHA256 共 32 字节，故最多 32 位
MAX_BITS = 32
# Bloom filter 每个哈希消耗摘要的一个字节，MD5 摘要为 16 字节
MAX_HASHES = 16
# cohort 以 4 字节大端写入 Bloom 哈希输入
MAX_COHORT = 0xFFFFFFFF
MAC_DIGEST_SIZE = 32


def to_big_endian(n: int, width: int = 4) -> bytes:
    """Return ``n`` as a ``width``-byte big-endian string (unsigned)."""
    if n < 0 or n >= 1 << (8 * width):
        raise ParamValidationError(f"integer {n} does not fit in {width} unsigned bytes")
    return int(n).to_bytes(width, "big")


def bits_to_bytes(bits: Bits, num_bits: int) -> bytes:
    """Big-endian byte form of a report; requires ``num_bits`` divisible by 8."""
    # 字节形式要求位宽为 8 的整数倍，否则高位字节无法与整数形式逐位对齐
    if num_bits <= 0 or num_bits % 8 != 0:
        raise ParamValidationError("num_bits must be divisible by 8 for byte output")
    if bits < 0 or bits >> num_bits:
        raise ParamValidationError(f"bits do not fit in {num_bits} bits")
    return bits.to_bytes(num_bits // 8, "big")


def bytes_to_bits(data: bytes) -> Bits:
    """Inverse of :func:`bits_to_bytes`."""
    return int.from_bytes(data, "big")


def bits_to_bitarray(bits: Bits, num_bits: int) -> bitarray:
    """
    Expand a report into a bitarray where index ``i`` holds bit ``i``.

    Note the index order is little-endian with respect to the integer form,
    which matches how Bloom filter positions are numbered.
    """
    out = bitarray(num_bits)
    out.setall(False)
    for i in range(num_bits):
        if (bits >> i) & 1:
            out[i] = True
    return out


def bits_to_indices(bits: Bits, num_bits: int) -> List[int]:
    """Return positions set to 1."""
    return [i for i in range(num_bits) if (bits >> i) & 1]


def count_ones(bits: Bits) -> int:
    return bin(bits).count("1")


def bits_to_string(bits: Bits, num_bits: int) -> str:
    """Render as a fixed-width binary string, most significant bit first."""
    return format(bits, f"0{num_bits}b")


def value_to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    """Canonical byte form of a reported value (str is UTF-8 encoded)."""
    ensure_type(value, (str, bytes, bytearray), label="value")
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)
