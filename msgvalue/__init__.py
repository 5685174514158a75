"""MessagePack value model: Integer and Utf8String scalars and the Value tree."""

__version__ = "0.1.0"
__all__ = ["scalars", "value"]