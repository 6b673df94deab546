"""kindstore - document repositories over a typed entity store."""

__version__ = "0.1.0"
