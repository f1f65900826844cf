"""Multi-timer lifecycle and scheduling engine"""

__version__ = "1.0.0"
