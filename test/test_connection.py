import mongomock
import pytest
from pymongo.errors import ConfigurationError, DuplicateKeyError

from config import Settings
from database import connection
from database.connection import build_mongo_uri, connect, ensure_indexes, get_database, init_db

MONGO_VARS = ["MONGO_URI", "MONGO_USER", "MONGO_PASSWORD", "MONGO_HOST", "MONGO_PORT", "MONGO_DB"]


@pytest.fixture
def clean_env(monkeypatch):
    for name in MONGO_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_uri_from_env_has_priority(clean_env):
    clean_env.setenv("MONGO_URI", "mongodb://db:27017/app")
    clean_env.setenv("MONGO_HOST", "ignored")
    assert build_mongo_uri(Settings()) == "mongodb://db:27017/app"


def test_uri_built_from_parts(clean_env):
    clean_env.setenv("MONGO_HOST", "db")
    clean_env.setenv("MONGO_USER", "admin")
    clean_env.setenv("MONGO_PASSWORD", "p@ss")
    assert build_mongo_uri(Settings()) == "mongodb://admin:p%40ss@db:27017"


def test_uri_empty_without_config(clean_env):
    assert build_mongo_uri(Settings()) == ""


def test_connect_requires_uri():
    with pytest.raises(ConfigurationError):
        connect("")


def test_init_db_exits_on_missing_uri(clean_env):
    with pytest.raises(SystemExit) as exc:
        init_db(Settings())
    assert exc.value.code == 1


def test_init_db_exits_on_malformed_uri(clean_env):
    clean_env.setenv("MONGO_URI", "not-a-mongo-uri")
    with pytest.raises(SystemExit) as exc:
        init_db(Settings())
    assert exc.value.code == 1


def test_init_db_exits_when_server_unreachable(clean_env):
    clean_env.setenv("MONGO_URI", "mongodb://127.0.0.1:1")
    clean_env.setenv("MONGO_TIMEOUT_MS", "50")
    with pytest.raises(SystemExit) as exc:
        init_db(Settings())
    assert exc.value.code == 1


def test_ensure_indexes_enforces_unique_email():
    db = get_database(mongomock.MongoClient(), "usersdb")
    ensure_indexes(db)
    db[connection.USERS_COLLECTION].insert_one({"email": "a@x.com"})
    with pytest.raises(DuplicateKeyError):
        db[connection.USERS_COLLECTION].insert_one({"email": "a@x.com"})
