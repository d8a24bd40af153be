from app.core.config import PROJECT_ROOT, Config


def test_default_database_lives_under_project_data_dir(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = Config(_env_file=None)

    assert settings.database_url == f"sqlite+aiosqlite:///{PROJECT_ROOT}/data/analytics.db"


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./elsewhere.db")

    assert Config(_env_file=None).database_url == "sqlite+aiosqlite:///./elsewhere.db"
