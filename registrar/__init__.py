"""Student registrar data store built on SQLAlchemy."""

__version__ = "0.1.0"
