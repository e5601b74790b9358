"""
Unit tests for the Encoder facade.
"""
# 说明：Encoder 门面的单元测试。
# 覆盖：
# - 端到端场景：k=32, h=2, m=128, f=0.25, p=0.75, q=0.5，重复编码 "foo" 时 Bloom 与 PRR 完全一致
# - cohort 读取与测试用覆写、整数输入路径、整数与字节两种输出形式逐位一致
# - 哈希 / MAC / 随机源异常向调用方传播，且失败时记录日志并对原始值脱敏

from __future__ import annotations

import logging

import pytest

from client_doubles import (
    P_MASK,
    Q_MASK,
    CountingRand,
    FailingRand,
    FixedMaskRand,
    NoneHash,
    RaisingMac,
    ShortHash,
    WrongSizeMac,
    make_deps,
    make_params,
)
from rappor.client import (
    EncodedReport,
    Encoder,
    EncodingError,
    HashOutputError,
    InvalidConfigurationError,
    MacOutputError,
    NumpyIrrRand,
    RandomSourceError,
)
from rappor.core.utils.param_validation import ParamValidationError

FOO_BLOOM = (1 << 4) | (1 << 12)
FOO_PRR = 12590144
FOO_IRR = 265224975
# encode_integer(0x123) 的 Bloom / PRR，输入为 00 00 01 23
INT_0X123_BLOOM = 264192
INT_0X123_PRR = 134482944


def test_end_to_end_bloom_and_prr_are_stable() -> None:
    # 使用新鲜随机源，两次编码的 Bloom 与 PRR 必须逐位相同
    encoder = Encoder("metric-name", make_params(), make_deps(irr_rand=NumpyIrrRand()))
    first = encoder.encode_report("foo")
    second = encoder.encode_report("foo")
    assert first.bloom == second.bloom == FOO_BLOOM
    assert first.prr == second.prr == FOO_PRR
    assert 0 <= first.irr < (1 << 32)
    assert 0 <= second.irr < (1 << 32)


def test_encode_value_known_output(encoder: Encoder) -> None:
    assert encoder.encode_value("foo") == FOO_IRR
    assert encoder.cohort == 3


def test_encode_value_accepts_bytes(encoder: Encoder) -> None:
    report = encoder.encode_report(b"foo")
    assert report.prr == FOO_PRR
    assert report.irr == FOO_IRR


def test_encode_report_fields(encoder: Encoder) -> None:
    report = encoder.encode_report("foo")
    assert isinstance(report, EncodedReport)
    assert report.to_dict() == {"bloom": FOO_BLOOM, "prr": FOO_PRR, "irr": FOO_IRR, "cohort": 3}


def test_irr_is_fresh_per_call() -> None:
    encoder = Encoder("metric-name", make_params(), make_deps(irr_rand=CountingRand()))
    first = encoder.encode_report("foo")
    second = encoder.encode_report("foo")
    assert first.prr == second.prr
    assert first.irr != second.irr


def test_set_cohort_changes_bloom(encoder: Encoder) -> None:
    encoder.set_cohort(4)
    assert encoder.cohort == 4
    report = encoder.encode_report("foo")
    assert report.bloom == (1 << 20) | (1 << 7)
    assert report.cohort == 4
    # 覆写只作用于编码器，不修改依赖集合中的原始 cohort
    assert encoder.deps.cohort == 3


def test_set_cohort_validates_range(encoder: Encoder) -> None:
    with pytest.raises(InvalidConfigurationError) as excinfo:
        encoder.set_cohort(128)
    assert excinfo.value.reason == "cohort_out_of_range"
    with pytest.raises(InvalidConfigurationError):
        encoder.set_cohort(-1)
    with pytest.raises(InvalidConfigurationError):
        encoder.set_cohort("4")  # type: ignore[arg-type]
    assert encoder.cohort == 3


def test_encode_integer_known_output(encoder: Encoder) -> None:
    report = encoder._encode_internal(b"\x00\x00\x01\x23")
    assert report.bloom == INT_0X123_BLOOM
    assert report.prr == INT_0X123_PRR
    assert encoder.encode_integer(0x123) == (P_MASK & ~INT_0X123_PRR) | (Q_MASK & INT_0X123_PRR)


def test_encode_integer_matches_big_endian_bytes(params) -> None:
    a = Encoder("m", params, make_deps(irr_rand=FixedMaskRand()))
    b = Encoder("m", params, make_deps(irr_rand=FixedMaskRand()))
    assert a.encode_integer(0x123) == b.encode_value(b"\x00\x00\x01\x23")


@pytest.mark.parametrize("bad", [-1, 1 << 32, 1.5, True])
def test_encode_integer_rejects_out_of_range(encoder: Encoder, bad) -> None:
    with pytest.raises(ParamValidationError):
        encoder.encode_integer(bad)


def test_integer_and_byte_outputs_agree(params) -> None:
    # 整数形式与大端字节形式必须逐位一致
    bits = Encoder("m", params, make_deps(irr_rand=FixedMaskRand())).encode_value("foo")
    expected = bytes(
        [(bits >> 24) & 0xFF, (bits >> 16) & 0xFF, (bits >> 8) & 0xFF, bits & 0xFF]
    )
    out = Encoder("m", params, make_deps(irr_rand=FixedMaskRand())).encode_value_bytes("foo")
    assert out == expected == b"\x0f\xcf\x03\x0f"


def test_integer_bytes_form(params) -> None:
    bits = Encoder("m", params, make_deps(irr_rand=FixedMaskRand())).encode_integer(7)
    out = Encoder("m", params, make_deps(irr_rand=FixedMaskRand())).encode_integer_bytes(7)
    assert int.from_bytes(out, "big") == bits


def test_byte_output_requires_byte_aligned_width() -> None:
    rand = FixedMaskRand()
    encoder = Encoder("m", make_params(num_bits=12), make_deps(irr_rand=rand))
    with pytest.raises(InvalidConfigurationError) as excinfo:
        encoder.encode_value_bytes("foo")
    assert excinfo.value.reason == "num_bits_not_byte_aligned"
    with pytest.raises(InvalidConfigurationError):
        encoder.encode_integer_bytes(1)
    # 失败在消耗随机性之前发生，整数形式不受影响
    assert rand.calls == []
    assert 0 <= encoder.encode_value("foo") < (1 << 12)


def test_short_hash_fails_encode() -> None:
    rand = FixedMaskRand()
    encoder = Encoder("m", make_params(), make_deps(hash_func=ShortHash(size=1), irr_rand=rand))
    with pytest.raises(HashOutputError):
        encoder.encode_value("foo")
    assert rand.calls == []


def test_wrong_mac_fails_encode() -> None:
    encoder = Encoder("m", make_params(), make_deps(hmac_func=WrongSizeMac()))
    with pytest.raises(MacOutputError):
        encoder.encode_value("foo")


def test_misbehaving_collaborators_surface_as_encoding_errors(caplog) -> None:
    # 哈希返回 None、MAC 直接抛错都应以 EncodingError 子类报告，并记录告警日志
    rand = FixedMaskRand()
    bad_hash = Encoder("m", make_params(), make_deps(hash_func=NoneHash(), irr_rand=rand))
    bad_mac = Encoder("m", make_params(), make_deps(hmac_func=RaisingMac(), irr_rand=rand))
    with caplog.at_level(logging.WARNING, logger="rappor.client.encoder"):
        with pytest.raises(EncodingError) as hash_exc:
            bad_hash.encode_value("foo")
        with pytest.raises(EncodingError) as mac_exc:
            bad_mac.encode_integer(7)
    assert isinstance(hash_exc.value, HashOutputError)
    assert isinstance(mac_exc.value, MacOutputError)
    assert isinstance(mac_exc.value.__cause__, OSError)
    assert len([r for r in caplog.records if r.name == "rappor.client.encoder"]) == 2
    assert rand.calls == []


@pytest.mark.parametrize("fail_on", [1, 2])
def test_random_source_failure_fails_encode(fail_on: int) -> None:
    encoder = Encoder("m", make_params(), make_deps(irr_rand=FailingRand(fail_on=fail_on)))
    with pytest.raises(RandomSourceError):
        encoder.encode_value("foo")
    other = Encoder("m", make_params(), make_deps(irr_rand=FailingRand(fail_on=fail_on)))
    with pytest.raises(EncodingError):
        other.encode_value_bytes("foo")


def test_failure_is_logged_with_masked_value(caplog) -> None:
    encoder = Encoder("metric-x", make_params(), make_deps(hmac_func=WrongSizeMac()))
    with caplog.at_level(logging.WARNING, logger="rappor.client.encoder"):
        with pytest.raises(MacOutputError):
            encoder.encode_value("very-private-value")
    records = [r for r in caplog.records if r.name == "rappor.client.encoder"]
    assert records
    assert "metric-x" in records[-1].getMessage()
    assert records[-1].value == "***"
    assert "very-private-value" not in caplog.text


def test_encoder_holds_references(params) -> None:
    deps = make_deps()
    encoder = Encoder("metric-name", params, deps)
    assert encoder.params is params
    assert encoder.deps is deps
    assert encoder.encoder_id == "metric-name"


def test_invalid_collaborator_types_rejected(params) -> None:
    with pytest.raises(InvalidConfigurationError):
        Encoder("m", params.to_dict(), make_deps())  # type: ignore[arg-type]
    with pytest.raises(InvalidConfigurationError):
        Encoder("m", params, object())  # type: ignore[arg-type]


def test_metadata_excludes_secret(encoder: Encoder) -> None:
    meta = encoder.get_metadata()
    assert meta["encoder_id"] == "metric-name"
    assert meta["hash"] == "md5"
    assert meta["mac"] == "hmac_sha256"
    assert meta["params"]["num_bits"] == 32
    assert "client-secret" not in repr(meta)
    assert "client-secret" not in repr(encoder.deps)
