"""SvcHound - service account discovery for Windows services and scheduled tasks."""

__version__ = "1.0.0"
