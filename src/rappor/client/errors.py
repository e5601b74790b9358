"""Exception hierarchy for the RAPPOR client encoder."""
# 说明：客户端编码器的两级异常体系。
# 职责：
# - InvalidConfigurationError：构造阶段的配置错误（编程错误），携带可机读的 reason 字段
# - EncodingError 及其子类：单次编码调用中协作方（哈希 / MAC / 随机源）行为异常导致的失败
# 约定：
# - 配置错误继承 ParamValidationError（即 ValueError），应在进程启动时暴露
# - 编码错误继承 RuntimeError，调用方应视为“本轮未发送报告”，而非畸形报告

from __future__ import annotations

from typing import Optional

from rappor.core.utils.param_validation import ParamValidationError


class InvalidConfigurationError(ParamValidationError):
    """Raised when encoder parameters or dependencies are misconfigured."""

    def __init__(self, message: str, *, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason or "invalid_configuration"


class EncodingError(RuntimeError):
    """Base class for per-call encoding failures caused by a collaborator."""


class HashOutputError(EncodingError):
    """The hash function returned fewer bytes than the Bloom filter needs."""


class MacOutputError(EncodingError):
    """The MAC function returned a digest of the wrong length."""


class RandomSourceError(EncodingError):
    """The IRR randomness source failed to produce a mask."""
