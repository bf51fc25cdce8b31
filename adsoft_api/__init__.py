"""ADSoft API: Active Directory user lookups and configuration secret encryption."""

__version__ = "1.0.0"
