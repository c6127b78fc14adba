"""A turn-based puzzle game of rolling logs and bird rescues, with a pygame front end."""

__version__ = "0.1.0"