# Status helpers used across the package.
#
# Modules import their output functions from here rather than from the
# console module, which keeps the rich rendering details (banner, tables,
# panels, transcript) out of the engine and transport code.
#
#   status  always shown ([Collecting] / [AccountCount] / [Done] lines)
#   warn    always shown, or verbose only with verbose_only=True
#   error   always shown
#   good    verbose only
#   info    verbose only
#   debug   --debug or SVCHOUND_DEBUG=1

from .console import debug, error, good, info, set_verbosity, status, warn

__all__ = ["debug", "error", "good", "info", "set_verbosity", "status", "warn"]
