"""easyread: profile-driven text adaptation with readability reports."""

__version__ = "0.1.0"
