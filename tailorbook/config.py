from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage
    STORAGE_BACKEND: str = "database"  # memory, file, database
    DATABASE_URL: str = "sqlite:///./tailorbook.db"
    STORAGE_DIR: str = "./data"

    # Collection keys (same layout as the browser build)
    CUSTOMERS_KEY: str = "dress-business-customers"
    ORDERS_KEY: str = "dress-business-orders"

    # Notifications
    DUE_SOON_POLL_SECONDS: int = 60  # seconds between due-soon refreshes

    # Dashboard
    RECENT_ORDERS_LIMIT: int = 5

    # CORS
    CORS_ORIGINS: list = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
