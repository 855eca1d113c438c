"""Route modules for the API."""
from api.routes import keys, claim, admin, cover, health

__all__ = ["keys", "claim", "admin", "cover", "health"]
