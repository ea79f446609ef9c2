"""Company funding — fundable-amount calculator over EDGAR net-income histories."""

__version__ = "1.0.0"
