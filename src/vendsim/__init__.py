"""vendsim - console vending machine simulator."""

__version__ = "0.1.0"
