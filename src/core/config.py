from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Photo Info Engine"
    LOG_LEVEL: str = "DEBUG"
    ENVIRONMENT: str = "development"

    # Logs raw tags and derived records for every request
    DEBUG: bool = False

    # Upload / fetch limits
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024
    HTTP_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = ".env"

configs = Settings()
