"""Password-store entry parsing and one-time password derivation."""

__all__ = ["__version__"]

__version__ = "0.1.0"
