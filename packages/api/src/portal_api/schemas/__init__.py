# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel


class HealthItem(BaseModel):
    """One component's entry in the health report."""

    name: str
    status: str
    message: str = ""
    version: str | None = None
