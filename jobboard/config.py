from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Override via environment (.env / deployment secrets)
    database_url: str = "sqlite:///./jobboard.db"
    secret_key: str = "replace-with-a-long-random-secret-key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://jobs.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Employer analytics
    analytics_default_days: int = 30
    top_jobs_limit: int = 10

    # Job detail suggestions
    similar_jobs_limit: int = 10
    company_jobs_limit: int = 5

    # Resume uploads arrive as PDF data URIs
    max_resume_upload_kb: int = 500

    # Employer QR login card
    frontend_base_url: str = "http://localhost:3000"
    qr_code_api_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    qr_code_size: str = "250x250"

    # Request guards
    rate_limit_auth_per_min: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
