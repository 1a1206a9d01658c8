# Shared plumbing for the service and task sources.
#
# A query function takes a ConnectionStrategy and returns raw entries or
# raises QueryError. `attempt()` turns that into a QueryOk/QueryFailed value
# so the sources can pick their next step without exception interception.

from typing import Callable, List, Sequence, TypeVar

from ..exceptions import SOURCE_ERRORS, QueryError
from ..models.account import HostTarget
from ..models.result import FailureKind, QueryFailed, QueryOk, QueryResult, SourceOutcome
from ..models.strategy import ConnectionStrategy
from ..utils.logging import debug, warn

T = TypeVar("T")

QueryFn = Callable[[ConnectionStrategy], Sequence[T]]


def attempt(query: QueryFn, host: HostTarget, strategy: ConnectionStrategy, interface: str) -> QueryResult:
    """Run one query attempt and capture its outcome as a value."""
    try:
        entries = list(query(strategy))
    except QueryError as e:
        debug(f"{host.name}: {interface} failed: {e.message}")
        return QueryFailed(interface=interface, error=e.message)
    except Exception as e:  # noqa: BLE001 - malformed output must not take the host down
        debug(f"{host.name}: {interface} raised {type(e).__name__}: {e}", exc_info=True)
        return QueryFailed(interface=interface, error=f"{type(e).__name__}: {e}")
    debug(f"{host.name}: {interface} returned {len(entries)} entries")
    return QueryOk(interface=interface, entries=entries)


def run_with_fallback(
    outcome: SourceOutcome,
    host: HostTarget,
    strategy: ConnectionStrategy,
    chain: List[tuple],
) -> QueryResult:
    """
    Try each (interface, query) in `chain` until one succeeds.

    Every step after the first is a fallback and leaves a warning on the
    outcome. When the chain is exhausted the outcome's failure kind is set:
    SourceQueryFailed for a single-interface chain, SourceFallbackFailed
    otherwise.
    """
    result: QueryResult = QueryFailed(interface="none", error="no interface available")
    errors = []
    for position, (interface, query) in enumerate(chain):
        outcome.attempts.append(interface)
        result = attempt(query, host, strategy, interface)
        if isinstance(result, QueryOk):
            return result
        errors.append(f"{interface}: {result.error}")
        if position + 1 < len(chain):
            message = SOURCE_ERRORS["fallback"].format(
                host=host.name,
                source=outcome.source,
                interface=interface,
                fallback=chain[position + 1][0],
            )
            warn(message, verbose_only=True)
            outcome.warnings.append(f"{message} ({result.error})")

    if len(chain) == 1:
        outcome.failure = FailureKind.SOURCE_QUERY_FAILED
        message = SOURCE_ERRORS["single"].format(
            host=host.name, source=outcome.source, interface=chain[0][0], detail=result.error
        )
    else:
        outcome.failure = FailureKind.SOURCE_FALLBACK_FAILED
        message = SOURCE_ERRORS["exhausted"].format(host=host.name, source=outcome.source, detail="; ".join(errors))
    warn(message)
    outcome.warnings.append(message)
    return result
