from app.core.config import settings
from app.core.base import Base

__all__ = ["settings", "Base"]
