# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, SessionLocal, engine, get_db
from .enums import ApplicationStatus, LOSPushStatus
from .models import Application, Profile

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "__version__",
    # Enums
    "ApplicationStatus",
    "LOSPushStatus",
    # Models
    "Application",
    "Profile",
]
