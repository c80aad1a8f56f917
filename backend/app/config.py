from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "SolarYield"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_json: bool = False
    log_level: str = "INFO"

    # Climate store (JSON file; in-memory only when empty)
    climate_data_path: str = ""
    default_region: str = "Hồ Chí Minh"

    # Panel defaults
    default_area: float = 100.0
    default_efficiency: float = 0.18
    default_temp_coeff: float = 0.0045
    default_noct: float = 45.0
    default_performance_ratio: float = 0.8


settings = Settings()
