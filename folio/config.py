from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    site_url: str = "http://localhost:8000/"
    posts_dir: Path = Path(__file__).parent.parent / "posts"
    host: str = "0.0.0.0"
    port: int = 8000
    fetch_timeout_seconds: float | None = None

    model_config = {"env_prefix": "FOLIO_"}


settings = Settings()
