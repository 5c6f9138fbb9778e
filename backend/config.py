import sys

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "NEXUS"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Provider calls
    HTTP_TIMEOUT_SECONDS: float = 10.0
    USER_AGENT: str = "NEXUS-OSINT/1.0"

    # External tools
    TOOLS_DIR: str = "tools"
    PYTHON_EXECUTABLE: str = sys.executable or "python"
    PROCESS_TIMEOUT_SECONDS: float = 120  # 2 min
    SHERLOCK_SCRIPT: str = "sherlock/sherlock/sherlock.py"
    SHERLOCK_SITE_TIMEOUT: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
