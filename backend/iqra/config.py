from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".iqra" / "data"
    sqlite_filename: str = "iqra.db"
    due_limit: int = 20  # default page size of the due queue
    cors_origins: list[str] = ["*"]
    host: str = "127.0.0.1"
    port: int = 0  # 0 = pick a free port at startup

    model_config = {"env_prefix": "IQRA_"}


settings = Settings()
