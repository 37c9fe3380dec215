from config import load_config

ENV_VARS = [
    "VISUALIZER_SECRET_KEY",
    "VISUALIZER_HOST",
    "VISUALIZER_PORT",
    "VISUALIZER_DEBUG",
    "VISUALIZER_LOG_LEVEL",
    "VISUALIZER_DEFAULT_SPEED",
    "VISUALIZER_MAX_NODES",
    "VISUALIZER_MAX_ITEMS",
    "VISUALIZER_MAX_SESSIONS",
]


def test_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    cfg = load_config()

    assert cfg.host == "0.0.0.0"
    assert cfg.port == 5000
    assert cfg.debug is False
    assert cfg.log_level == "INFO"
    assert cfg.default_speed == 50
    assert cfg.max_nodes == 15
    assert cfg.max_items == 20
    assert cfg.max_sessions == 256
    assert len(cfg.secret_key) == 64


def test_secret_key_is_random_when_unset(monkeypatch):
    monkeypatch.delenv("VISUALIZER_SECRET_KEY", raising=False)
    assert load_config().secret_key != load_config().secret_key


def test_overrides(monkeypatch):
    monkeypatch.setenv("VISUALIZER_SECRET_KEY", "s3cret")
    monkeypatch.setenv("VISUALIZER_PORT", "8080")
    monkeypatch.setenv("VISUALIZER_DEBUG", "yes")
    monkeypatch.setenv("VISUALIZER_LOG_LEVEL", "debug")
    monkeypatch.setenv("VISUALIZER_DEFAULT_SPEED", "80")
    monkeypatch.setenv("VISUALIZER_MAX_NODES", "8")
    monkeypatch.setenv("VISUALIZER_MAX_SESSIONS", "4")
    cfg = load_config()

    assert cfg.secret_key == "s3cret"
    assert cfg.port == 8080
    assert cfg.debug is True
    assert cfg.log_level == "DEBUG"
    assert cfg.default_speed == 80
    assert cfg.max_nodes == 8
    assert cfg.max_sessions == 4
