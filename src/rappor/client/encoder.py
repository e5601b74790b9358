"""
RAPPOR client encoder.

Responsibilities
  - Validate (Params, Deps) once at construction.
  - Run Bloom filter -> PRR -> IRR for string/bytes or 32-bit integer inputs.
  - Expose integer and big-endian byte forms of the report.

Usage Context
  - One encoder per metric (``encoder_id``) per client process.
  - Concurrent encode calls are safe; ``set_cohort`` is not.

Limitations
  - Reports are at most 32 bits wide (one HMAC-SHA256 byte per bit).
"""
# 说明：编码器门面，串联 Bloom filter、PRR 与 IRR 三个阶段，对外提供整数与字节两种报告形式。
# 职责：
# - 构造时通过 validate_params 校验参数与 cohort，失败即抛出 InvalidConfigurationError
# - encode_value / encode_integer 及其字节版本运行完整流水线，任一阶段失败抛出 EncodingError 子类
# - encode_report 返回各阶段中间结果，供模拟器与测试检查 Bloom / PRR 的确定性
# - cohort / set_cohort 提供 cohort 读取与（仅测试用、非线程安全的）覆写
# 约定：Params 与 Deps 以引用方式持有，不复制密钥与概率状态

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from rappor.core.utils.logging import get_logger
from rappor.core.utils.param_validation import ParamValidationError
from .bits import Bits, bits_to_bytes, to_big_endian, value_to_bytes
from .deps import Deps
from .errors import EncodingError, InvalidConfigurationError
from .params import Params, validate_params
from .stages import get_prr_masks, make_bloom_filter, make_irr, make_prr

logger = get_logger(__name__)

Value = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class EncodedReport:
    """
    All three stage outputs of a single encode call.

    - bloom / prr are deterministic for a given (value, cohort, secret).
    - irr is the only field that should ever leave the client.
    """

    bloom: Bits
    prr: Bits
    irr: Bits
    cohort: int

    def to_dict(self) -> Dict[str, Any]:
        return {"bloom": self.bloom, "prr": self.prr, "irr": self.irr, "cohort": self.cohort}


class Encoder:
    """Encodes values into RAPPOR reports for one metric."""

    def __init__(self, encoder_id: str, params: Params, deps: Deps):
        # 参数或依赖类型错误同样属于配置错误，在构造期统一拒绝
        if not isinstance(params, Params):
            raise InvalidConfigurationError("params must be a Params instance", reason="invalid_type")
        if not isinstance(deps, Deps):
            raise InvalidConfigurationError("deps must be a Deps instance", reason="invalid_type")
        validate_params(params, cohort=deps.cohort)
        self._encoder_id = str(encoder_id)
        self._params = params
        self._deps = deps
        self._cohort = deps.cohort

    @property
    def encoder_id(self) -> str:
        return self._encoder_id

    @property
    def params(self) -> Params:
        return self._params

    @property
    def deps(self) -> Deps:
        return self._deps

    @property
    def cohort(self) -> int:
        """Cohort currently used to salt the Bloom filter hash."""
        return self._cohort

    def set_cohort(self, cohort: int) -> None:
        """
        Override the cohort, e.g. to make tests deterministic.

        Not thread-safe: must not be called while another thread is encoding
        with this encoder.
        """
        if isinstance(cohort, bool) or not isinstance(cohort, int):
            raise InvalidConfigurationError(
                f"cohort must be an integer (got {cohort!r})", reason="invalid_type"
            )
        validate_params(self._params, cohort=cohort)
        self._cohort = cohort

    # ------------------------------------------------------------------ encoding
    def _encode_internal(self, value: bytes) -> EncodedReport:
        # 三个阶段依次执行，任一阶段失败立即中止，不返回部分结果
        params = self._params
        deps = self._deps
        cohort = self._cohort
        try:
            bloom = make_bloom_filter(value, cohort, params, deps.hash_func)
            uniform, f_mask = get_prr_masks(value, deps.client_secret, params, deps.hmac_func)
            prr = make_prr(bloom, uniform, f_mask, params.num_bits)
            irr = make_irr(prr, params, deps.irr_rand)
        except EncodingError as exc:
            logger.warning(
                "encoding failed for %s: %s",
                self._encoder_id,
                exc,
                extra={"encoder_id": self._encoder_id, "value": value},
            )
            raise
        return EncodedReport(bloom=bloom, prr=prr, irr=irr, cohort=cohort)

    def encode_report(self, value: Value) -> EncodedReport:
        """Encode ``value`` and return every stage output (for simulation/testing)."""
        return self._encode_internal(value_to_bytes(value))

    def encode_value(self, value: Value) -> Bits:
        """
        Encode a string or bytes value; return the IRR bits as an int.

        Raises:
            EncodingError: if a collaborator misbehaves; no report is produced.
        """
        return self._encode_internal(value_to_bytes(value)).irr

    def encode_value_bytes(self, value: Value) -> bytes:
        """Like :meth:`encode_value`, returned as ``num_bits // 8`` big-endian bytes."""
        self._require_byte_aligned()
        return bits_to_bytes(self.encode_value(value), self._params.num_bits)

    def encode_integer(self, n: int) -> Bits:
        """Encode an unsigned 32-bit integer via its 4-byte big-endian form."""
        return self._encode_internal(self._integer_bytes(n)).irr

    def encode_integer_bytes(self, n: int) -> bytes:
        self._require_byte_aligned()
        return bits_to_bytes(self.encode_integer(n), self._params.num_bits)

    def _integer_bytes(self, n: int) -> bytes:
        if isinstance(n, bool) or not isinstance(n, int):
            raise ParamValidationError(f"integer value required (got {type(n).__name__})")
        return to_big_endian(n)

    def _require_byte_aligned(self) -> None:
        # 在消耗任何随机性之前检查字节输出的前置条件
        if self._params.num_bits % 8 != 0:
            raise InvalidConfigurationError(
                f"num_bits ({self._params.num_bits}) must be divisible by 8 for byte output",
                reason="num_bits_not_byte_aligned",
            )

    def get_metadata(self) -> Mapping[str, Any]:
        """JSON-friendly description of the encoder; never includes the secret."""
        return {
            "type": "rappor",
            "encoder_id": self._encoder_id,
            "cohort": self._cohort,
            "params": self._params.to_dict(),
            "hash": getattr(self._deps.hash_func, "name", type(self._deps.hash_func).__name__),
            "mac": getattr(self._deps.hmac_func, "name", type(self._deps.hmac_func).__name__),
        }

    def __repr__(self) -> str:
        return f"Encoder(encoder_id={self._encoder_id!r}, cohort={self._cohort}, params={self._params!r})"
