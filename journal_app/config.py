# journal service configuration
# loads env vars for mongodb, jwt, and the daily journaling window

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseSettings):
    # mongodb
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "daily_journal_db")

    # jwt auth
    JWT_SECRET: str = os.getenv("JWT_SECRET", "daily-journal-dev-secret-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # "today" starts at local midnight in this zone
    JOURNAL_TIMEZONE: str = os.getenv("JOURNAL_TIMEZONE", "UTC")

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
