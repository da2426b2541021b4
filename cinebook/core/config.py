from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "CineBook Seat Selection"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Remote cinema API (Render free tier can take a while to wake up)
    REMOTE_API_BASE_URL: str = "https://baitapnhom-laptrinhchothietbididong-omtc.onrender.com/api"
    REMOTE_API_TIMEOUT: float = 45.0

    # Seat-type default prices, VND
    PRICE_NORMAL: int = 100_000
    PRICE_VIP: int = 150_000
    PRICE_COUPLE: int = 200_000

    # Seat grid sizing, device-independent units
    SEAT_MIN_SIZE: int = 28
    SEAT_MAX_SIZE: int = 40
    SEAT_GAP: int = 6
    ROW_LABEL_WIDTH: int = 24
    GRID_PADDING: int = 16
    COUPLE_WIDTH_FACTOR: float = 2.1

    # Zoom
    ZOOM_MIN: float = 0.8
    ZOOM_MAX: float = 2.0
    ZOOM_STEP: float = 0.2

    # Local sessions are dropped after this much inactivity
    SESSION_TTL_MINUTES: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def seat_type_prices(self) -> dict[str, int]:
        return {
            "NORMAL": self.PRICE_NORMAL,
            "VIP": self.PRICE_VIP,
            "COUPLE": self.PRICE_COUPLE,
        }


settings = Settings()
