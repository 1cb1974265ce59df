"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    hilbertplot_env: str = "development"  # "development" enables FastAPI debug tracebacks
    hilbertplot_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Curve engine
    pool_workers: int = 0  # 0: cpu_count - 1
    default_family: str = "H0"
    max_plot_cells: int = 1 << 20  # reject larger requests

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
