from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # AWS S3 (optional; club logos go to Supabase Storage when unset)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None
    s3_public_base_url: Optional[str] = None  # e.g. CDN in front of the bucket

    # Club logos
    club_logo_bucket: str = "club-logos"
    club_logo_prefix: str = "clubs"
    club_logo_max_bytes: int = 5 * 1024 * 1024
    club_logo_content_types: str = "image/png,image/jpeg,image/jpg,image/svg+xml"

    # App
    app_name: str = "sportsync-backend"
    app_url: str = "http://localhost:3000"  # Used to build invite links
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_club_logo_content_types(self) -> List[str]:
        return [t.strip().lower() for t in self.club_logo_content_types.split(",") if t.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
