from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://ptcrm_user:ptcrm_password@db:5432/ptcrm_db"
    SECRET_KEY: str = "SECRET_KEY_FOR_PTCRM"
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Сколько сессий отдаёт GET /sessions без явного limit
    SESSION_LIST_LIMIT: int = 50

    # Единственный аккаунт тренера, создаётся на старте если отсутствует
    TRAINER_EMAIL: str = "trainer@ptcrm.com"
    TRAINER_PASSWORD: str = "password123"
    TRAINER_FIRST_NAME: str = "Marco"
    TRAINER_LAST_NAME: str = "Fitness"

    @property
    def REFRESH_SECRET_KEY(self) -> str:
        return self.SECRET_KEY + "_refresh"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
