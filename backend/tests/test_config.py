"""
Tests for application configuration.
"""

import pytest

from medscan.config.settings import DEFAULT_BACKEND_ORDER, AppConfig
from medscan.domain.exceptions import PipelineConfigurationError
from medscan.infrastructure.factory import build_pipeline, build_sources


@pytest.fixture
def clean_env(monkeypatch):
    for name in [
        "MEDSCAN_BACKENDS", "MEDSCAN_OPENAI_API_KEY", "OPENAI_API_KEY",
        "MEDSCAN_GROQ_API_KEY", "GROQ_API_KEY", "MEDSCAN_OLLAMA_BASE_URL",
        "MEDSCAN_BACKEND_TIMEOUT", "MEDSCAN_OCR_ENABLED", "MEDSCAN_OCR_LANGUAGE",
        "MEDSCAN_EXTRACTED_TEXT_ENABLED", "MEDSCAN_LOG_LEVEL", "MEDSCAN_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = AppConfig.from_env()

    assert config.backends.order == DEFAULT_BACKEND_ORDER
    assert config.backends.openai_api_key is None
    assert config.merge.min_name_length == 3
    assert config.sources.extracted_text_enabled
    assert not config.sources.ocr_enabled


def test_from_env(clean_env):
    clean_env.setenv("MEDSCAN_BACKENDS", "groq:llava-v1.5, ollama:llava:13b ,")
    clean_env.setenv("OPENAI_API_KEY", "sk-fallback")
    clean_env.setenv("MEDSCAN_OPENAI_API_KEY", "sk-preferred")
    clean_env.setenv("GROQ_API_KEY", "gsk-test")
    clean_env.setenv("MEDSCAN_BACKEND_TIMEOUT", "12.5")
    clean_env.setenv("MEDSCAN_OCR_ENABLED", "yes")
    clean_env.setenv("MEDSCAN_LOG_LEVEL", "DEBUG")

    config = AppConfig.from_env()

    assert config.backends.order == ("groq:llava-v1.5", "ollama:llava:13b")
    assert config.backends.openai_api_key == "sk-preferred"
    assert config.backends.groq_api_key == "gsk-test"
    assert config.backends.timeout == 12.5
    assert config.sources.ocr_enabled
    assert config.logging.level == "DEBUG"


def test_from_dict_makes_order_a_tuple():
    config = AppConfig.from_dict({
        "backends": {"order": ["static:a", "static:b"], "timeout": 5},
        "merge": {"ai_confidence": 0.9},
        "unknown": {"ignored": True},
    })

    assert config.backends.order == ("static:a", "static:b")
    assert config.backends.timeout == 5
    assert config.merge.ai_confidence == 0.9


def test_to_dict_never_contains_keys():
    config = AppConfig()
    config.backends.openai_api_key = "sk-secret"

    assert "sk-secret" not in repr(config.to_dict())
    assert config.to_dict()["backends"]["order"] == list(DEFAULT_BACKEND_ORDER)


def test_sources_follow_priority_order():
    config = AppConfig.from_dict({"sources": {"ocr_enabled": True}})

    names = [s.source_name for s in build_sources(config.sources)]

    assert names == ["tesseract_ocr", "extracted_text"]


def test_build_pipeline_from_config():
    config = AppConfig.from_dict({"backends": {"order": "static:a,static:b"}})

    pipeline = build_pipeline(config)

    assert pipeline.backend_names == ["static:a", "static:b"]
    assert pipeline.source_names == ["extracted_text"]


def test_empty_order_is_a_configuration_error():
    config = AppConfig.from_dict({"backends": {"order": ""}})

    with pytest.raises(PipelineConfigurationError):
        build_pipeline(config)


def test_malformed_backend_env_is_a_configuration_error(clean_env):
    clean_env.setenv("MEDSCAN_BACKENDS", "static:a,openai")

    with pytest.raises(PipelineConfigurationError):
        build_pipeline(AppConfig.from_env())
