from functools import lru_cache
from pathlib import Path
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

ASSETS_DIR = Path(__file__).resolve().parent / "assets"


class EngineSettings(BaseSettings):
    catalog_path: str = str(ASSETS_DIR / "analysis_overview.yml")
    quiz_path: str = str(ASSETS_DIR / "skin_type_quiz.yml")
    secondary_threshold: int = 2

    # Optional text-generation collaborator; template text is used when disabled or failing
    enrichment_enabled: bool = False
    enrichment_base_url: str = "http://localhost:8000"
    enrichment_timeout_seconds: float = 8.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='ASSESSMENT_')


@lru_cache
def get_settings() -> EngineSettings:
    return EngineSettings()
