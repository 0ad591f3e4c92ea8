from typing import Dict

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Stray Map"
    PROJECT_DESCRIPTION: str = "Stray animal sightings and territory estimation"
    VERSION: str = "0.3.0"
    API_V1_STR: str = "/api/v1"

    LOG_LEVEL: str = "INFO"

    # Animal registry (external persistence API) settings
    ANIMAL_REGISTRY_API_URL: str = "http://localhost:3000/api/animals"
    ANIMAL_REGISTRY_TIMEOUT: float = 10.0

    # Territory estimation settings
    # Maximum roaming range per animal type, in meters. "other" is required.
    ROAMING_RANGES: Dict[str, float] = {
        "dog": 2000.0,
        "cat": 1500.0,
        "other": 1000.0,
    }
    RADIUS_BUFFER_FACTOR: float = 1.2
    MIN_TERRITORY_RADIUS_METERS: float = 50.0
    MIN_TERRITORY_SIGHTINGS: int = 3

    class ConfigDict:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
