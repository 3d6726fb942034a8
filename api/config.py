from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

Base = declarative_base()


class AppConfig(BaseSettings):
    """Runtime configuration; every field can be overridden by an env var of the same name."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    database_url: str = "sqlite:///./curriculum-architect.db"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen:latest"
    generation_timeout: float = 120.0
    log_level: str = "INFO"
    log_dir: str = "logs"
    notification_ttl_seconds: float = 4.0


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()


def build_engine(database_url: str | None = None):
    url = database_url or get_config().database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def build_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_db(engine) -> None:
    # Import models so their tables are registered on Base.metadata.
    from api.models import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
