"""Weekly composite scoring and lineup/waiver recommendations for fantasy football."""

__version__ = "1.0.0"
