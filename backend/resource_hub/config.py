from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Learning Resource Hub"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENV: str = "dev"  # Environment: "dev", "staging", "prod"

    # Database (MongoDB)
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "learning_resource_hub"

    # Frontend (Vite dev server)
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Security
    SECRET_KEY: str = "devsecret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12

    # Resource listing
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    MAX_PAGE: int = 100_000

    # Compare-and-set attempts for rating writes before giving up
    RATING_WRITE_RETRIES: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
