from app.api.v1.compatibility.endpoints import router

__all__ = ["router"]
