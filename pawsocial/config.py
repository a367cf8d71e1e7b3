import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Settings:
    # -------------------------------------------------------
    # Project
    # -------------------------------------------------------
    PROJECT_NAME: str = "Pawsocial Visibility API"
    ENV: str = os.getenv("ENV", "dev")

    # -------------------------------------------------------
    # Database
    # -------------------------------------------------------
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./pawsocial.db"
    )

    # Hosted Postgres hands out postgres:// but SQLAlchemy needs postgresql://
    if DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

    # -------------------------------------------------------
    # Authentication (Supabase-issued JWTs)
    # -------------------------------------------------------
    SUPABASE_JWT_SECRET: str = os.getenv("SUPABASE_JWT_SECRET", "")
    SUPABASE_JWT_AUDIENCE: str = os.getenv(
        "SUPABASE_JWT_AUDIENCE",
        "authenticated"
    )
    JWT_ALGORITHM: str = "HS256"

    # -------------------------------------------------------
    # Logging
    # -------------------------------------------------------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # -------------------------------------------------------
    # Relationship mutations
    # -------------------------------------------------------
    # Whole-operation retries when a follow/block transaction conflicts
    MUTATION_RETRY_ATTEMPTS: int = int(
        os.getenv("MUTATION_RETRY_ATTEMPTS", 3)
    )

    # -------------------------------------------------------
    # Activity feed
    # -------------------------------------------------------
    ACTIVITY_FEED_LIMIT: int = int(
        os.getenv("ACTIVITY_FEED_LIMIT", 50)
    )


# Single instance that is imported everywhere
settings = Settings()
