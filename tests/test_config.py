import pytest

from app.core.config import Settings, validate_settings
from app.core.exceptions import ConfigurationError
from app.main import create_app


def test_validate_settings_accepts_secret(settings):
    assert validate_settings(settings) is True


@pytest.mark.parametrize("secret", [None, "", "   "])
def test_missing_secret_fails_validation(secret):
    settings = Settings(_env_file=None, JWT_SECRET=secret)
    assert settings.JWT_SECRET is None
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        validate_settings(settings)


def test_short_secret_rejected_in_production():
    settings = Settings(_env_file=None, JWT_SECRET="short", ENVIRONMENT="production")
    with pytest.raises(ConfigurationError):
        validate_settings(settings)


@pytest.mark.asyncio
async def test_startup_refuses_without_secret(repositories, tmp_path):
    settings = Settings(_env_file=None, JWT_SECRET=None, STATIC_DIR=str(tmp_path))
    app = create_app(settings, repositories)

    with pytest.raises(ConfigurationError):
        async with app.router.lifespan_context(app):
            pass


@pytest.mark.asyncio
async def test_startup_wires_components(settings, repositories):
    app = create_app(settings, repositories)

    async with app.router.lifespan_context(app):
        assert app.state.repositories is repositories
        assert app.state.token_service.verify(app.state.token_service.issue("abc")) == "abc"
        assert app.state.database is None
