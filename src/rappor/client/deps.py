"""Dependency bundle: client identity plus the injected capabilities."""
# 说明：客户端依赖集合，打包客户端密钥、预先分配的 cohort 以及哈希 / MAC / 随机源三类能力。
# 职责：
# - 构造时规范化客户端密钥为字节串，并检查能力对象满足对应接口
# - 作为不可变对象在多个编码器、多个线程之间只读共享
# 约定：
# - cohort 与 num_cohorts 的上界关系由 Encoder 在装配 Params 时校验，这里只拒绝负值
# - client_secret 只用作 MAC 密钥材料，不出现在 repr 与元数据中

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .capabilities.base import BaseHashFunction, BaseIrrRand, BaseMacFunction
from .errors import InvalidConfigurationError


def _normalize_secret(secret: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise InvalidConfigurationError(
        f"client_secret must be str or bytes (got {type(secret).__name__})",
        reason="invalid_type",
    )


@dataclass(frozen=True)
class Deps:
    """
    Immutable bundle of client identity and collaborators.

    - Configuration
      - client_secret: Per-client secret used as HMAC key (str is UTF-8 encoded).
      - cohort: Pre-assigned cohort in [0, num_cohorts).
      - hash_func: Bloom filter digest capability.
      - hmac_func: PRR keyed MAC capability.
      - irr_rand: IRR biased random mask capability.
    """

    client_secret: bytes = field(repr=False)
    cohort: int
    hash_func: BaseHashFunction
    hmac_func: BaseMacFunction
    irr_rand: BaseIrrRand

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_secret", _normalize_secret(self.client_secret))
        if isinstance(self.cohort, bool) or not isinstance(self.cohort, int):
            raise InvalidConfigurationError(
                f"cohort must be an integer (got {self.cohort!r})", reason="invalid_type"
            )
        if self.cohort < 0:
            raise InvalidConfigurationError(
                f"cohort out of range (cohort {self.cohort} is negative)",
                reason="cohort_out_of_range",
            )
        # 能力对象必须实现对应抽象接口，避免在首次编码时才暴露装配错误
        for attr, base in (
            ("hash_func", BaseHashFunction),
            ("hmac_func", BaseMacFunction),
            ("irr_rand", BaseIrrRand),
        ):
            if not isinstance(getattr(self, attr), base):
                raise InvalidConfigurationError(
                    f"{attr} must implement {base.__name__}", reason="invalid_type"
                )
