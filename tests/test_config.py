import pytest
from pydantic import ValidationError

from conftest import make_settings
from mcp_digitalocean.config import Settings


def test_defaults():
    settings = make_settings()
    assert settings.transport == "stdio"
    assert settings.api_url == "https://api.digitalocean.com/v2"
    assert settings.retry_max == 4
    assert settings.service_list() == []


def test_token_is_stripped():
    assert make_settings(api_token="  'dop_v1_abc'\n").api_token == "dop_v1_abc"


def test_service_list_splits_and_trims():
    settings = make_settings(services=" droplets, networking ,,databases ")
    assert settings.service_list() == ["droplets", "networking", "databases"]


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("DIGITALOCEAN_API_TOKEN", "from-env")
    monkeypatch.setenv("DIGITALOCEAN_SERVICES", "accounts")
    monkeypatch.setenv("DIGITALOCEAN_TRANSPORT", "http")

    settings = Settings(_env_file=None)

    assert settings.api_token == "from-env"
    assert settings.service_list() == ["accounts"]
    assert settings.transport == "http"


def test_token_is_required(monkeypatch):
    monkeypatch.delenv("DIGITALOCEAN_API_TOKEN", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
