"""Output module for SvcHound results."""
