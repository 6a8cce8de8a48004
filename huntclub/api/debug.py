from fastapi import APIRouter

from huntclub.config import settings

router = APIRouter(prefix="/debug")


@router.get("/calendar-config")
def calendar_config() -> dict[str, bool]:
    # Presence only; values (the api key in particular) are never echoed.
    return {
        "apiKey": bool(settings.GOOGLE_CALENDAR_API_KEY),
        "clubCalendarId": bool(settings.GOOGLE_CALENDAR_ID),
        "holidaysCalendarId": bool(settings.GOOGLE_CALENDAR_HOLIDAYS_ID),
        "additionalCalendarId": bool(settings.GOOGLE_CALENDAR_ID_2),
    }
