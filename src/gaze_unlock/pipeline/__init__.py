from .distributor import Distributor

__all__ = ["Distributor"]
