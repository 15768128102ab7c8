from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the SGE notification backend"""

    # Application settings
    service_name: str = "sge-notifications"
    environment: str = "dev"
    log_level: str = "INFO"
    port: int = 3000

    # Supabase settings
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None

    # Firebase settings
    firebase_project_id: str = "asistencia-inicial"
    firebase_credentials_base64: Optional[str] = None

    # FCM settings
    fcm_base_url: str = "https://fcm.googleapis.com"
    fcm_android_channel_id: str = "high_importance_channel"
    fcm_timeout_seconds: Optional[float] = None  # None keeps the transport default

    # Error responses include provider/database messages when enabled
    expose_error_details: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Create settings instance
settings = Settings()
