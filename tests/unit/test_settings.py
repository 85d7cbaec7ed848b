import pytest
from pydantic import ValidationError

from coverscan.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_max_upload_bytes(self) -> None:
        s = Settings()
        assert s.max_upload_bytes == 5_242_880

    def test_default_storage_backend(self) -> None:
        s = Settings()
        assert s.storage_backend == "local"

    def test_default_supabase_bucket(self) -> None:
        s = Settings()
        assert s.supabase_bucket == "book-covers"

    def test_default_inference_provider(self) -> None:
        s = Settings()
        assert s.inference_provider == "openai"

    def test_default_inference_openai_timeout(self) -> None:
        s = Settings()
        assert s.inference_openai_timeout_seconds == 30

    def test_default_groq_model_is_a_current_vision_model(self) -> None:
        s = Settings()
        assert s.inference_groq_model_name == "meta-llama/llama-4-scout-17b-16e-instruct"


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_openai_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INFERENCE_OPENAI_API_KEY", "sk-test")
        s = Settings()
        assert s.inference_openai_api_key == "sk-test"

    def test_loads_storage_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_BACKEND", "supabase")
        s = Settings()
        assert s.storage_backend == "supabase"

    def test_loads_max_upload_bytes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "1024")
        s = Settings()
        assert s.max_upload_bytes == 1024

    def test_ignores_unknown_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOMETHING_UNRELATED", "x")
        Settings()


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INFERENCE_OPENAI_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()
