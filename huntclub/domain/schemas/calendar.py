from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CalendarEvent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    start: str
    end: str
    description: str = ""
    location: str = ""
    is_all_day: bool = False
    is_public: bool = True
    source: Literal["google"] = "google"
    calendar_name: str | None = None
