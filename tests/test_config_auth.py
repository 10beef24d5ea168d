"""
Testes de configuração e login
==============================
"""

import pytest

from sabor.core.config import EnvironmentMode, Settings, StorageBackend
from sabor.core.exceptions import AuthenticationError, ValidationError
from sabor.services import auth
from sabor.services.storage import MemoryStore, get_store, reset_store


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ENV_MODE", "PRODUCTION")
    monkeypatch.setenv("STORAGE_BACKEND", "Database")
    monkeypatch.setenv("ADMIN_PASSWORD", "s3nha-forte")

    settings = Settings(_env_file=None)

    assert settings.env_mode == EnvironmentMode.PRODUCTION
    assert settings.storage_backend == StorageBackend.DATABASE
    assert settings.uses_database
    assert settings.validate_production_config() == []


def test_production_defaults_are_flagged():
    settings = Settings(_env_file=None, env_mode="production", storage_backend="memory", admin_password="123456")
    assert settings.validate_production_config() == ["ADMIN_PASSWORD", "STORAGE_BACKEND"]


def test_invalid_storage_backend():
    with pytest.raises(ValueError):
        Settings(_env_file=None, storage_backend="redis")


def test_default_store_is_memory():
    reset_store()
    try:
        store = get_store()
        assert isinstance(store, MemoryStore)
        assert get_store() is store
    finally:
        reset_store()


def test_login_with_custom_credentials():
    settings = Settings(_env_file=None, admin_username="dona", admin_password="feijoada")
    token = auth.login("dona", "feijoada", settings=settings)
    assert token.startswith("admin_token_")

    with pytest.raises(AuthenticationError):
        auth.login("dona", "123456", settings=settings)


@pytest.mark.parametrize("username,password", [("", "123456"), ("admin", ""), ("", "")])
def test_login_requires_both_fields(username, password):
    with pytest.raises(ValidationError):
        auth.login(username, password, settings=Settings(_env_file=None))


def test_login_non_ascii_password():
    with pytest.raises(AuthenticationError):
        auth.login("admin", "sêñha", settings=Settings(_env_file=None))
