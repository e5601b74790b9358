"""
Hypothesis strategies for property-based testing of the RAPPOR client.
"""
# 说明：属性测试中共享的 Hypothesis 策略集。
# 职责：
# - 生成满足全部约束的 Params（位宽、哈希数、cohort 数与三种概率）
# - 生成任意字节值与客户端密钥
# - 基于已生成的 Params 采样合法 cohort

from hypothesis import strategies as st

from rappor.client import Params


# ------------------------------------------------------------------ Probabilities
def probabilities():
    # 生成 (0, 1] 区间内的概率，排除 0 以满足参数校验
    return st.floats(min_value=1e-6, max_value=1.0, allow_nan=False, allow_infinity=False)


# ------------------------------------------------------------------ Params
@st.composite
def valid_params(draw, byte_aligned=False):
    # 组合生成合法 Params；byte_aligned=True 时位宽取 8 的倍数，便于测试字节输出形式
    if byte_aligned:
        num_bits = draw(st.sampled_from([8, 16, 24, 32]))
    else:
        num_bits = draw(st.integers(min_value=1, max_value=32))
    return Params(
        num_bits=num_bits,
        num_hashes=draw(st.integers(min_value=1, max_value=16)),
        num_cohorts=draw(st.integers(min_value=1, max_value=256)),
        prob_f=draw(probabilities()),
        prob_p=draw(probabilities()),
        prob_q=draw(probabilities()),
    )


@st.composite
def cohorts_for(draw, params):
    return draw(st.integers(min_value=0, max_value=params.num_cohorts - 1))


# ------------------------------------------------------------------ Values
values = st.binary(min_size=0, max_size=64)
secrets = st.binary(min_size=1, max_size=32)
