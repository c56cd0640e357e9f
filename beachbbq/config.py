# beachbbq/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./beachbbq.db"
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: float = 60  # supports decimal durations

    ENVIRONMENT: str = "development"  # development / staging / production
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]

    # Size of the physical BBQ pool shared by every slot of a day
    MAX_UNITS: int = 5
    ALLOW_OVERBOOKING: bool = False
    SEED_EQUIPMENT: bool = True

    DRIVER_CODES: List[str] = ["DRIVER001", "DRIVER002", "DRIVER003"]

    OPENWEATHERMAP_API_KEY: Optional[str] = None
    OPENWEATHERMAP_URL: str = "https://api.openweathermap.org/data/2.5/weather"

    class Config:
        env_file = ".env"

settings = Settings()
