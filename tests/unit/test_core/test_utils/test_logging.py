"""
Unit tests for logging utilities.
"""
# 说明：日志配置与隐私脱敏过滤相关的单元测试。
# 覆盖：
# - configure_logging(...)：根据给定日志级别初始化 logging 系统
# - get_logger(...)：获取带 PrivacyFilter 的 logger 实例
# - 验证 client_secret / value 等敏感字段在日志记录中被掩码，关闭掩码时保持原样

import logging

from rappor.core.utils import PrivacyFilter, configure_logging, get_config, get_logger


def test_get_logger_attaches_privacy_filter() -> None:
    logger = get_logger("rappor.test.filter")
    assert any(isinstance(f, PrivacyFilter) for f in logger.filters)
    # 重复获取不会叠加过滤器
    get_logger("rappor.test.filter")
    assert sum(isinstance(f, PrivacyFilter) for f in logger.filters) == 1


def test_sensitive_fields_are_masked(caplog) -> None:
    # 验证日志配置后，敏感字段 client_secret / value 会被 PrivacyFilter 掩码
    configure_logging(level="INFO")
    logger = get_logger("rappor.test.mask")
    with caplog.at_level(logging.INFO, logger="rappor.test.mask"):
        logger.info("message", extra={"client_secret": "s3cr3t", "value": "foo"})
    record = caplog.records[-1]
    assert "message" in caplog.text
    assert record.client_secret == "***"
    assert record.value == "***"


def test_masking_can_be_disabled(caplog) -> None:
    cfg = get_config()
    saved = cfg.mask_sensitive_fields
    cfg.mask_sensitive_fields = False
    try:
        logger = get_logger("rappor.test.unmasked")
        with caplog.at_level(logging.INFO, logger="rappor.test.unmasked"):
            logger.info("message", extra={"value": "foo"})
        assert caplog.records[-1].value == "foo"
    finally:
        cfg.mask_sensitive_fields = saved
