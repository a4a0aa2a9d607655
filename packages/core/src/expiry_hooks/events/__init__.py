from .dispatcher import EventDispatcher
from .filters import FilterPipeline

__all__ = ["EventDispatcher", "FilterPipeline"]
