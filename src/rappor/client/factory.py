"""Convenience builder wiring default collaborators into an Encoder."""
# 说明：按运行时配置与调用参数装配默认哈希（注册表名称）、HMAC-SHA256 与随机源，构造 Encoder。
# 约定：
# - 未显式给出 hash_name / seed 时回退到全局 RuntimeConfig 的 default_hash / rng_seed
# - 给定种子时使用可复现的 NumpyIrrRand，否则使用操作系统熵源 SystemIrrRand

from __future__ import annotations

from typing import Optional, Union

from rappor.core.utils.config import get_config
from .capabilities import BaseIrrRand, HmacSha256, NumpyIrrRand, SystemIrrRand, create_hash_function
from .deps import Deps
from .encoder import Encoder
from .params import Params


def create_encoder(
    encoder_id: str,
    params: Params,
    client_secret: Union[str, bytes],
    cohort: int,
    *,
    hash_name: Optional[str] = None,
    seed: Optional[int] = None,
    irr_rand: Optional[BaseIrrRand] = None,
) -> Encoder:
    """Build an Encoder with registry hash, HMAC-SHA256 and a default IRR source."""
    config = get_config()
    hash_func = create_hash_function(hash_name or config.default_hash)
    if irr_rand is None:
        effective_seed = seed if seed is not None else config.rng_seed
        irr_rand = NumpyIrrRand(effective_seed) if effective_seed is not None else SystemIrrRand()
    deps = Deps(
        client_secret=client_secret,  # type: ignore[arg-type]
        cohort=cohort,
        hash_func=hash_func,
        hmac_func=HmacSha256(),
        irr_rand=irr_rand,
    )
    return Encoder(encoder_id, params, deps)
