"""SQLAlchemy database models."""
from dotenv import load_dotenv
from app.models.base import Base
from app.models.campaign import Campaign


load_dotenv()

__all__ = [
    "Base",
    "Campaign",
]
