from fastapi import FastAPI
import uvicorn

from huntclub.api import calendar, debug
from huntclub.core.env import load_env
from huntclub.logging import configure_logging

load_env()
configure_logging()

app = FastAPI(title="Hunt Club")
app.include_router(calendar.router)
app.include_router(debug.router)


@app.get("/ping")
def ping() -> dict[str, str]:
    return {"message": "pong"}


if __name__ == "__main__":
    uvicorn.run("huntclub.main:app", host="0.0.0.0", port=8000, reload=True)
