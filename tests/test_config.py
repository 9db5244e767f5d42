"""
Test suite for configuration

Tests BIGINT_* environment settings and their effect on parsing limits and
narrowing conversions.
"""

import pytest

from bigint import BigInt, FormatError, NarrowingOverflow
from bigint.config import BigIntConfig, get_config, reload_config


@pytest.fixture
def env(monkeypatch):
    """Environment patcher that restores the global config afterwards"""
    yield monkeypatch
    monkeypatch.undo()
    reload_config()


class TestBigIntConfig:
    """Test configuration loading"""

    def test_defaults(self, env):
        """Test default settings without environment overrides"""
        for name in ("BIGINT_LOG_LEVEL", "BIGINT_LOG_FORMAT", "BIGINT_LOG_FILE",
                     "BIGINT_MAX_PARSE_DIGITS", "BIGINT_STRICT_NARROWING"):
            env.delenv(name, raising=False)

        settings = BigIntConfig()
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file is None
        assert settings.max_parse_digits == 0
        assert settings.strict_narrowing is False

    def test_environment_override(self, env):
        """Test BIGINT_* variables override defaults"""
        env.setenv("BIGINT_LOG_LEVEL", "DEBUG")
        env.setenv("BIGINT_MAX_PARSE_DIGITS", "500")

        settings = reload_config()
        assert settings.log_level == "DEBUG"
        assert settings.max_parse_digits == 500
        assert get_config() is settings

    def test_case_insensitive(self, env):
        """Test lowercase variable names are honoured"""
        env.setenv("bigint_strict_narrowing", "true")
        assert reload_config().strict_narrowing is True


class TestParseLimit:
    """Test BIGINT_MAX_PARSE_DIGITS"""

    def test_limit_rejects_long_text(self, env):
        """Test limit rejects long text"""
        env.setenv("BIGINT_MAX_PARSE_DIGITS", "5")
        reload_config()

        assert BigInt.parse("-12345") == -12345
        with pytest.raises(FormatError, match="exceeds 5 digits"):
            BigInt.parse("123456")

    def test_zero_disables_limit(self, env):
        """Test zero disables limit"""
        env.setenv("BIGINT_MAX_PARSE_DIGITS", "0")
        reload_config()

        assert BigInt.parse("9" * 2000).to_string() == "9" * 2000


class TestStrictNarrowing:
    """Test BIGINT_STRICT_NARROWING"""

    def test_strict_mode_raises(self, env):
        """Test strict mode raises"""
        env.setenv("BIGINT_STRICT_NARROWING", "true")
        reload_config()

        assert BigInt.value_of(-2**63).to_long() == -2**63
        assert BigInt.value_of(2**31 - 1).to_int() == 2**31 - 1

        with pytest.raises(NarrowingOverflow):
            BigInt.value_of(2**63).to_long()
        with pytest.raises(OverflowError):
            BigInt.value_of(-2**31 - 1).to_int()

    def test_default_mode_truncates(self, env):
        """Test default mode truncates"""
        env.setenv("BIGINT_STRICT_NARROWING", "false")
        reload_config()

        assert BigInt.value_of(2**63).to_long() == -2**63
