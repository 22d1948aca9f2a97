from .generation import Generation

__all__ = ['Generation']
