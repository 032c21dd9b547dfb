import os
from dotenv import load_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env
load_dotenv()

# Security settings
SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")  # Replace with strong env value in production
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# CORS origins allowed to call the API (comma-separated)
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if o.strip()
]


# -------------------------
# AI generation settings
# -------------------------
DEFAULT_MODELS = {"gemini": "gemini-2.5-flash", "openai": "gpt-4o-mini"}
GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GenerationSettings(BaseSettings):
    """AI configuration with environment variable support"""

    provider: str = "gemini"  # "gemini" or "openai"
    api_key: str = ""
    api_url: str = ""  # filled from the model for gemini
    model: str = ""  # falls back to DEFAULT_MODELS[provider]
    timeout: float = 120.0

    model_config = SettingsConfigDict(
        env_prefix="AI_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def fill_provider_defaults(self):
        provider = self.provider.strip().lower()
        if not self.model:
            self.model = DEFAULT_MODELS.get(provider, "")
        if not self.api_url and provider == "gemini":
            self.api_url = GEMINI_API_URL.format(model=self.model)
        return self


def get_generation_settings() -> GenerationSettings:
    # Built on every call so a key added to the environment is picked up without a restart
    return GenerationSettings()
