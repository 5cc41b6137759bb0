from app.api.v1.reviews.endpoints import router

__all__ = ["router"]
