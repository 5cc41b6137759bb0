from app.api.v1.feed.endpoints import router

__all__ = ["router"]
