from common.models.base import Base

__all__ = ["Base"]
