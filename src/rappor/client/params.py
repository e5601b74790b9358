"""
RAPPOR algorithm parameters and their validation contract.

Responsibilities
  - Hold the immutable (k, h, m, f, p, q) parameter bundle.
  - Reject misconfiguration at construction time with a distinguishable reason.
  - Load parameters from the ``k,h,m,p,q,f`` CSV layout used by simulations.

Limitations
  - Validation never clamps or defaults; any violation aborts construction.
"""
# 说明：RAPPOR 编码参数（位宽 k、哈希数 h、cohort 数 m 以及 f/p/q 三个概率）的不可变载体与校验逻辑。
# 职责：
# - Params：冻结数据类，构造时完成类型规范化与取值范围校验
# - validate_params：统一的校验入口，可附带 cohort 检查，供 Encoder 在装配依赖时复用
# - check_valid_probability：概率须落在 (0.0, 1.0]，0.0 视为“未初始化”而拒绝
# - from_csv / to_dict / from_dict：支持从 CSV 参数文件与字典形式加载和导出

from __future__ import annotations

import csv
import numbers
from dataclasses import dataclass
from typing import IO, Any, Dict, Mapping, Optional

from rappor.core.utils.logging import get_logger
from .bits import MAX_BITS, MAX_COHORT, MAX_HASHES
from .errors import InvalidConfigurationError

logger = get_logger(__name__)

_CSV_HEADER = ["k", "h", "m", "p", "q", "f"]


def _fail(message: str, reason: str) -> None:
    # 记录配置错误并抛出携带 reason 的异常，配置错误属于启动期的编程错误
    logger.error(message)
    raise InvalidConfigurationError(message, reason=reason)


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        _fail(f"{name} must be an integer (got {value!r})", "invalid_type")
    return int(value)


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        _fail(f"{name} must be a real number (got {value!r})", "invalid_type")
    return float(value)


def check_valid_probability(prob: float, name: str) -> None:
    """Probabilities must lie in (0.0, 1.0]; 0.0 means "not initialized"."""
    # 使用 not (0 < p <= 1) 的写法同时拒绝 NaN
    if not (0.0 < prob <= 1.0):
        _fail(
            f"{name} should be between 0.0 and 1.0 (and non-zero) (got {prob:.2f})",
            f"invalid_{name}",
        )


def validate_params(params: "Params", cohort: Optional[int] = None) -> None:
    """
    Validate a parameter bundle and, optionally, a cohort against it.

    Raises:
        InvalidConfigurationError: on the first violated constraint.
    """
    if params.num_bits <= 0:
        _fail("num_bits must be positive", "num_bits_not_positive")
    if params.num_hashes <= 0:
        _fail("num_hashes must be positive", "num_hashes_not_positive")
    if params.num_cohorts <= 0:
        _fail("num_cohorts must be positive", "num_cohorts_not_positive")

    # 上限与协作方摘要长度绑定：HMAC-SHA256 每位一字节，MD5 每个哈希一字节
    if params.num_bits > MAX_BITS:
        _fail(
            f"num_bits ({params.num_bits}) can't be greater than {MAX_BITS}",
            "num_bits_too_large",
        )
    if params.num_hashes > MAX_HASHES:
        _fail(
            f"num_hashes ({params.num_hashes}) can't be greater than {MAX_HASHES}",
            "num_hashes_too_large",
        )

    # cohort 以 4 字节大端写入哈希输入，超出无符号 32 位同样视为越界
    if cohort is not None and not (0 <= cohort < params.num_cohorts and cohort <= MAX_COHORT):
        _fail(
            f"cohort out of range (cohort {cohort}, num_cohorts {params.num_cohorts})",
            "cohort_out_of_range",
        )

    check_valid_probability(params.prob_f, "prob_f")
    check_valid_probability(params.prob_p, "prob_p")
    check_valid_probability(params.prob_q, "prob_q")


@dataclass(frozen=True)
class Params:
    """
    Immutable RAPPOR parameters.

    - Configuration
      - num_bits: Bloom filter width k (1..32).
      - num_hashes: Number of Bloom filter hashes h (1..16).
      - num_cohorts: Number of cohorts m.
      - prob_f: PRR noise probability f.
      - prob_p: IRR probability of reporting 1 for a 0 bit.
      - prob_q: IRR probability of reporting 1 for a 1 bit.

    - Behavior
      - Validated in ``__post_init__``; an invalid bundle never exists.
    """
    # 构造即校验，校验失败时对象不会被创建

    num_bits: int
    num_hashes: int
    num_cohorts: int
    prob_f: float
    prob_p: float
    prob_q: float

    def __post_init__(self) -> None:
        # 冻结数据类需通过 object.__setattr__ 写回规范化后的数值类型
        for name in ("num_bits", "num_hashes", "num_cohorts"):
            object.__setattr__(self, name, _as_int(getattr(self, name), name))
        for name in ("prob_f", "prob_p", "prob_q"):
            object.__setattr__(self, name, _as_float(getattr(self, name), name))
        validate_params(self)

    @property
    def bit_width(self) -> int:
        return self.num_bits

    @property
    def hash_count(self) -> int:
        return self.num_hashes

    @property
    def cohort_count(self) -> int:
        return self.num_cohorts

    def to_dict(self) -> Dict[str, Any]:
        # 导出为 JSON 友好的字典，便于记录实验配置
        return {
            "num_bits": self.num_bits,
            "num_hashes": self.num_hashes,
            "num_cohorts": self.num_cohorts,
            "prob_f": self.prob_f,
            "prob_p": self.prob_p,
            "prob_q": self.prob_q,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Params":
        missing = [k for k in ("num_bits", "num_hashes", "num_cohorts", "prob_f", "prob_p", "prob_q") if k not in data]
        if missing:
            raise InvalidConfigurationError(
                f"params missing fields: {', '.join(missing)}", reason="missing_fields"
            )
        return cls(
            num_bits=data["num_bits"],
            num_hashes=data["num_hashes"],
            num_cohorts=data["num_cohorts"],
            prob_f=data["prob_f"],
            prob_p=data["prob_p"],
            prob_q=data["prob_q"],
        )

    @classmethod
    def from_csv(cls, f: IO[str]) -> "Params":
        """
        Read parameters from a CSV file with the header ``k,h,m,p,q,f``.

        The file must contain exactly one header row and one data row.
        """
        # 严格匹配表头且只允许一行数据，避免静默读取错误的参数文件
        rows = [row for row in csv.reader(f) if row]
        if not rows or [c.strip() for c in rows[0]] != _CSV_HEADER:
            raise InvalidConfigurationError(
                f"header must be {','.join(_CSV_HEADER)}", reason="malformed_csv"
            )
        if len(rows) != 2:
            raise InvalidConfigurationError(
                "params file must contain exactly one data row", reason="malformed_csv"
            )
        row = rows[1]
        if len(row) != len(_CSV_HEADER):
            raise InvalidConfigurationError(
                f"expected {len(_CSV_HEADER)} columns, got {len(row)}", reason="malformed_csv"
            )
        try:
            k, h, m = (int(row[0]), int(row[1]), int(row[2]))
            p, q, prob_f = (float(row[3]), float(row[4]), float(row[5]))
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"invalid params row: {','.join(row)}", reason="malformed_csv"
            ) from exc
        return cls(num_bits=k, num_hashes=h, num_cohorts=m, prob_f=prob_f, prob_p=p, prob_q=q)
