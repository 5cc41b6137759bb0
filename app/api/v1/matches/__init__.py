from app.api.v1.matches.endpoints import router

__all__ = ["router"]
