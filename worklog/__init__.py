"""Work Log - per-account daily work time records with a cached, durable store"""

__version__ = "1.0.0"
