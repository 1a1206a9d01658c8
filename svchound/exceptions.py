# SvcHound Exceptions and Error Messages

# =============================================================================
# Exceptions
# =============================================================================


class SvcHoundError(Exception):
    """Base exception for SvcHound operations"""

    pass


class QueryError(SvcHoundError):
    """A management-interface query against a host failed"""

    def __init__(self, interface: str, message: str):
        super().__init__(f"{interface}: {message}")
        self.interface = interface
        self.message = message


class ExportError(SvcHoundError):
    """Writing the result set to disk failed"""

    pass


# =============================================================================
# Error Messages
# =============================================================================

SOURCE_ERRORS = {
    "fallback": "{host}: {source} query via {interface} failed, falling back to {fallback}",
    "exhausted": "{host}: {source} enumeration failed on every interface ({detail})",
    "single": "{host}: {source} enumeration via {interface} failed ({detail})",
    "unreachable": "{host}: host is unreachable, skipping",
}
