from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "development"
    GOOGLE_CALENDAR_API_KEY: str | None = None
    GOOGLE_CALENDAR_API_BASE_URL: str = "https://www.googleapis.com/calendar/v3"
    GOOGLE_CALENDAR_ID: str | None = None
    GOOGLE_CALENDAR_NAME: str = "Club Calendar"
    GOOGLE_CALENDAR_HOLIDAYS_ID: str | None = None
    GOOGLE_CALENDAR_HOLIDAYS_NAME: str = "Holidays"
    GOOGLE_CALENDAR_ID_2: str | None = None
    GOOGLE_CALENDAR_NAME_2: str = "Additional Calendar"
    GOOGLE_CALENDAR_MAX_RESULTS: int = 100
    CALENDAR_REQUEST_TIMEOUT_S: float = 10.0
    CALENDAR_SORT_CHRONOLOGICAL: bool = True
    CALENDAR_API_BASE_URL: str = "http://localhost:8000"


settings = Settings()
