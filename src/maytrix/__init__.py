"""maytrix — a closed value algebra and a rule engine built on it."""

__version__ = "0.1.0"
