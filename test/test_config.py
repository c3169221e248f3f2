from config import Settings


def test_defaults(monkeypatch):
    for name in ["PORT", "HOST", "PROJECT_NAME", "ALLOWED_ORIGINS", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    cfg = Settings()
    assert cfg.PORT == 11000
    assert cfg.HOST == "0.0.0.0"
    assert cfg.PROJECT_NAME == "UsersAPI"
    assert cfg.ALLOWED_ORIGINS == ["*"]
    assert cfg.LOG_LEVEL == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test,http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = Settings()
    assert cfg.PORT == 8080
    assert cfg.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]
    assert cfg.LOG_LEVEL == "DEBUG"
