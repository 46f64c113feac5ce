from linknest.models.base import Base
from linknest.models.link import Link

__all__ = ["Base", "Link"]
