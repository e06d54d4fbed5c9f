import pytest
from pymongo.errors import ServerSelectionTimeoutError

import main
from config import DEFAULT_API_URL, get_api_base_url, load_settings
from exceptions import ConfigurationError


def test_load_settings_requires_mongo_uri() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({})
    with pytest.raises(ConfigurationError):
        load_settings({"MONGO_URI": "   "})


def test_load_settings_defaults() -> None:
    settings = load_settings({"MONGO_URI": "mongodb://localhost:27017/"})
    assert settings.mongo_uri == "mongodb://localhost:27017/"
    assert settings.mongo_db_name == "user_directory"
    assert settings.port == 4000


def test_load_settings_reads_port_and_db_name() -> None:
    settings = load_settings({"MONGO_URI": "mongodb://db/", "PORT": "8080", "MONGO_DB_NAME": "people"})
    assert settings.port == 8080
    assert settings.mongo_db_name == "people"


def test_api_base_url() -> None:
    assert get_api_base_url({}) == DEFAULT_API_URL
    assert get_api_base_url({"USER_API_URL": "http://api:4000/"}) == "http://api:4000"


def test_main_exits_when_mongo_uri_missing(monkeypatch) -> None:
    monkeypatch.delenv("MONGO_URI", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1


def test_load_settings_rejects_non_numeric_port() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"MONGO_URI": "mongodb://db/", "PORT": "abc"})


def test_main_exits_when_port_is_invalid(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://localhost:27017/")
    monkeypatch.setenv("PORT", "abc")

    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1


class UnreachableAdmin:
    def command(self, name):
        raise ServerSelectionTimeoutError("MongoDB injoignable")


class UnreachableClient:
    admin = UnreachableAdmin()


def test_main_exits_when_mongo_ping_fails(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://localhost:27017/")
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setattr(main, "create_mongo_client", lambda settings: UnreachableClient())
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: pytest.fail("le serveur ne doit pas démarrer"))

    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1
