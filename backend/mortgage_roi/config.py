from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    CAPITAL_GAINS_TAX_RATE: float = 0.15
    DEFAULT_RETURN_RATE_PERCENT: float = 10.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
