"""Configuration settings for the team sync engine"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class ServiceConfig:
    """Configuration for the remote API"""
    url: str
    api_key: str = ""
    use_stub: bool = False
    timeout: float = 30.0


class Settings:
    """Application settings"""

    # Environment
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')
    RUN_MODE = os.getenv('RUN_MODE', 'local')  # local or production

    # Remote API
    API_URL = os.getenv('TEAMSYNC_API_URL', 'http://localhost:8080/api')
    API_KEY = os.getenv('TEAMSYNC_API_KEY')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '30'))

    # Stub backend
    STUB_LATENCY = float(os.getenv('STUB_LATENCY', '0.1'))  # seconds per call

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE')

    @classmethod
    def is_local_mode(cls) -> bool:
        """Check if running in local mode"""
        return cls.RUN_MODE.lower() == 'local'

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production"""
        return cls.ENVIRONMENT.lower() == 'production'

    @classmethod
    def api_service(cls) -> ServiceConfig:
        """Service configuration for the entity gateway"""
        return ServiceConfig(
            url=cls.API_URL,
            api_key=cls.API_KEY or "",
            use_stub=cls.is_local_mode(),
            timeout=cls.REQUEST_TIMEOUT
        )

    @classmethod
    def validate(cls):
        """Validate required settings"""
        if cls.is_production():
            required = ['API_KEY']
            missing = []

            for setting in required:
                if not getattr(cls, setting):
                    missing.append(setting)

            if missing:
                raise ValueError(f"Missing required settings for production: {', '.join(missing)}")


# Create settings instance
settings = Settings()
