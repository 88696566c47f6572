import pytest
from pydantic import ValidationError

from sms_dispatch.config import get_settings, load_settings
from sms_dispatch.domain.errors import ConfigurationError

AT_VARS = ("AT_API_KEY", "AT_USERNAME", "AT_SENDER", "AT_API_BASE_URL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in AT_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestLoadSettings:
    def test_reads_environment(self, clean_env):
        clean_env.setenv("AT_API_KEY", "atsk_live_key")
        clean_env.setenv("AT_USERNAME", "acme")
        clean_env.setenv("AT_SENDER", "ACME")

        settings = load_settings(_env_file=None)

        assert settings.at_api_key == "atsk_live_key"
        assert settings.at_username == "acme"
        assert settings.at_sender == "ACME"
        assert settings.is_sandbox is False

    def test_sandbox_mode(self, clean_env):
        clean_env.setenv("AT_API_KEY", "atsk_sandbox_key")
        clean_env.setenv("AT_USERNAME", "sandbox")

        settings = load_settings(_env_file=None)

        assert settings.is_sandbox is True
        assert settings.at_sender is None

    def test_blank_sender_is_absent(self, clean_env):
        clean_env.setenv("AT_API_KEY", "atsk_live_key")
        clean_env.setenv("AT_USERNAME", "acme")
        clean_env.setenv("AT_SENDER", "  ")

        assert load_settings(_env_file=None).at_sender is None

    @pytest.mark.parametrize("missing", ["AT_API_KEY", "AT_USERNAME"])
    def test_missing_required_variable_is_fatal(self, clean_env, missing):
        clean_env.setenv("AT_API_KEY", "atsk_live_key")
        clean_env.setenv("AT_USERNAME", "acme")
        clean_env.delenv(missing)

        with pytest.raises(ConfigurationError, match=missing):
            load_settings(_env_file=None)

    def test_blank_api_key_is_fatal(self, clean_env):
        clean_env.setenv("AT_API_KEY", "   ")
        clean_env.setenv("AT_USERNAME", "sandbox")

        with pytest.raises(ConfigurationError, match="AT_API_KEY"):
            load_settings(_env_file=None)

    def test_unrelated_dotenv_entries_are_ignored(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("AT_API_KEY=atsk_0123456789\nAT_USERNAME=sandbox\nPORT=3000\n")

        settings = load_settings(_env_file=env_file)

        assert settings.at_api_key == "atsk_0123456789"
        assert settings.is_sandbox is True

    def test_invalid_value_reports_real_error(self, clean_env):
        with pytest.raises(ConfigurationError, match="Invalid configuration") as exc_info:
            load_settings(
                _env_file=None,
                at_api_key="atsk_0123456789",
                at_username="sandbox",
                log_level=123,
            )

        assert "log_level" in str(exc_info.value)
        assert "is required" not in str(exc_info.value)

    def test_settings_are_immutable(self, sandbox_settings):
        with pytest.raises(ValidationError):
            sandbox_settings.at_username = "acme"


class TestGetSettings:
    def test_loaded_once(self, clean_env):
        clean_env.setenv("AT_API_KEY", "atsk_sandbox_key")
        clean_env.setenv("AT_USERNAME", "sandbox")

        first = get_settings()
        clean_env.setenv("AT_USERNAME", "acme")

        assert get_settings() is first
