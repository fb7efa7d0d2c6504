from .projection_service import ProjectionService

__all__ = ["ProjectionService"]
