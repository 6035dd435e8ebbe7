"""
Tests for Settings and startup configuration checks.
"""

from describer.core.config import Settings
from describer.pipeline import dependencies
from describer.pipeline.dependencies import missing_configuration


def test_flag_attribute_comes_from_environment(monkeypatch):
    monkeypatch.setenv("GENERATE_DESCRIPTION_ATTRIBUTE", "gen-description")
    assert Settings(_env_file=None).generate_description_attribute == "gen-description"


def test_defaults(monkeypatch):
    monkeypatch.delenv("GENERATE_DESCRIPTION_ATTRIBUTE", raising=False)
    settings = Settings(_env_file=None)

    assert settings.generate_description_attribute == "generateDescription"
    assert settings.api_port == 8080
    assert settings.description_locale == "en"


def test_vision_endpoint_follows_location():
    assert Settings(_env_file=None, vision_location="eu").vision_endpoint == "eu-vision.googleapis.com"
    assert Settings(_env_file=None, vision_location="global").vision_endpoint is None
    assert Settings(_env_file=None, vision_location=None).vision_endpoint is None


def test_missing_configuration_lists_unset_credentials(monkeypatch):
    monkeypatch.setattr(dependencies, "vision_credentials_available", lambda: True)
    settings = Settings(
        _env_file=None,
        openai_api_key="sk-test",
        ctp_project_key="demo",
        ctp_client_id="",
        ctp_client_secret="",
    )

    assert missing_configuration(settings) == ["CTP_CLIENT_ID", "CTP_CLIENT_SECRET"]
    assert not settings.commercetools_configured


def test_missing_google_credentials_are_reported(monkeypatch):
    monkeypatch.setattr(dependencies, "vision_credentials_available", lambda: False)
    settings = Settings(
        _env_file=None,
        openai_api_key="sk-test",
        ctp_project_key="demo",
        ctp_client_id="client",
        ctp_client_secret="secret",
    )

    assert missing_configuration(settings) == ["GOOGLE_APPLICATION_CREDENTIALS"]
