from .heading import HeadingEntry

__all__ = [
    "HeadingEntry",
]
