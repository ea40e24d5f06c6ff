from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Cars Haven"

    # Server
    PORT: int = 5000
    ENVIRONMENT: str = "development"
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "logs/errors.log"

    # MongoDB
    DB_USER: str = ""
    DB_PASS: str = ""
    DB_CLUSTER_HOST: str = "cluster0.drohc.mongodb.net"
    DB_APP_NAME: str = "Cluster0"
    DB_NAME: str = "carsDb"
    # Full URI override (local mongod, docker, ...)
    MONGODB_URI: Optional[str] = None

    # Session token
    ACCESS_TOKEN_SECRET: str = "dev_secret_key"
    TOKEN_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_MINUTES: int = 60
    COOKIE_SECURE: bool = False

    # Require a session on /booking routes and scope them to the caller
    PROTECT_BOOKINGS: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def mongodb_uri(self) -> str:
        if self.MONGODB_URI:
            return self.MONGODB_URI
        credentials = ""
        if self.DB_USER:
            credentials = f"{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASS)}@"
        return (
            f"mongodb+srv://{credentials}{self.DB_CLUSTER_HOST}"
            f"/?retryWrites=true&w=majority&appName={self.DB_APP_NAME}"
        )

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

settings = Settings()
