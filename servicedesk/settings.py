import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SERVICEDESK_", extra="ignore")

    api_url: str = "http://localhost:5000/api"
    api_token: str = ""
    api_timeout: float = 10.0

    default_currency: str = "USD"
    reminder_days: list[int] = [7, 3, 1]
    pdf_output_dir: str = "./invoices"

    log_level: str = "INFO"
    log_json: bool = False

    def auth_headers(self) -> dict[str, str]:
        if not self.api_token:
            logger.warning(
                "SERVICEDESK_API_TOKEN is not set; requests will be sent without "
                "an Authorization header and the backend will likely reject them."
            )
            return {}
        return {"Authorization": f"Bearer {self.api_token}"}


settings = Settings()
