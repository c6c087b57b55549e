import os

from pwnstyles.config import settings


def test_project_dotenv_overrides_environment(tmp_path, monkeypatch) -> None:
    project_dir = tmp_path / "project"
    project_env = project_dir / ".env"

    project_dir.mkdir()
    project_env.write_text("PWNSTYLES_ENV=production\n", encoding="utf-8")

    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("PWNSTYLES_ENV", "development")

    settings._load_dotenv()

    assert os.getenv("PWNSTYLES_ENV") == "production"
    settings.get_settings.cache_clear()
    assert settings.get_settings().environment == "production"
