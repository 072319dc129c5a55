from pydantic import BaseModel
from datetime import date


class Holiday(BaseModel):
    date: date
    name: str
    type: str  # national, state, municipal
