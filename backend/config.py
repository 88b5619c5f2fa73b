import os
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "MusicLibrary"
APP_AUTHOR = "MusicLibraryDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR

    # Paths
    # DATABASE_URL も DB_HOST も無い場合は platformdirs 配下の DuckDB ファイルを使う
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: Optional[str] = None

    # PostgreSQL
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_NAME: str = ""
    DB_SSLMODE: str = "disable"
    DATABASE_URL: Optional[str] = None

    # External song info API
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT: int = 10

    # Network
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "music_library.duckdb")

        if not self.LOG_DIR:
            self.LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    @property
    def database_url(self) -> str:
        """接続先URL。DATABASE_URL > PostgreSQL (DB_HOST) > DuckDB の優先順"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (
                f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?sslmode={self.DB_SSLMODE}"
            )
        return f"duckdb:///{self.DB_PATH}"

    @property
    def is_duckdb(self) -> bool:
        return self.database_url.startswith("duckdb")

settings = Settings()
