"""
Application settings loaded from the environment (and a .env file when present)
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    def __init__(self):
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", 8000))
        self.reload = os.getenv("RELOAD", "True").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.api_title = os.getenv("API_TITLE", "RecruitFlow Pipeline API")
        self.api_version = os.getenv("API_VERSION", "1.0.0")
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]


settings = Settings()
