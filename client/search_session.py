"""Debounced search-as-you-type session.

Each query change is tagged with an increasing request id. A search runs only
after the input has been quiet for the debounce interval, and its result is
applied only if no newer query has been issued in the meantime. In-flight
HTTP calls are never aborted; stale answers are just ignored.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum

from catalog.models import SearchResponse, Track
from client.api import RequestsApiError

logger = logging.getLogger(__name__)

INITIAL_MESSAGE = "Start typing to search for tracks."
SEARCHING_MESSAGE = "Searching songs…"
SEARCH_FAILED_MESSAGE = "Search failed"
DEBOUNCE_SECONDS = 0.3


class SearchStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SearchState:
    status: SearchStatus = SearchStatus.IDLE
    results: list[Track] = field(default_factory=list)
    message: str | None = INITIAL_MESSAGE
    error: str | None = None


class SearchSession:
    """Holds the search box state for one user."""

    def __init__(
        self,
        search: Callable[[str], Awaitable[SearchResponse]],
        on_change: Callable[[SearchState], None] | None = None,
        debounce: float = DEBOUNCE_SECONDS,
    ):
        """Create a session.

        Args:
            search: Coroutine function performing the search (e.g. RequestsApiClient.search)
            on_change: Called with every new state, for rendering
            debounce: Quiet period in seconds before a search is sent
        """
        self._search = search
        self._on_change = on_change
        self._debounce = debounce
        self._request_id = 0
        self._timer: asyncio.TimerHandle | None = None
        self._in_flight: set[asyncio.Task] = set()
        self.query = ""
        self.state = SearchState()

    def _set_state(self, state: SearchState) -> None:
        self.state = state
        if self._on_change:
            self._on_change(state)

    def set_query(self, query: str) -> None:
        """Record a new query and schedule its search. Must run inside an event loop."""
        self.query = query
        self._request_id += 1
        request_id = self._request_id

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        term = query.strip()
        if not term:
            self._set_state(SearchState())
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce, self._start_search, term, request_id)

    def _start_search(self, term: str, request_id: int) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._run_search(term, request_id))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self._request_id

    async def _run_search(self, term: str, request_id: int) -> None:
        self._set_state(
            SearchState(
                status=SearchStatus.LOADING,
                results=self.state.results,
                message=SEARCHING_MESSAGE,
            )
        )

        try:
            response = await self._search(term)
        except RequestsApiError as e:
            if self._is_stale(request_id):
                return
            self._set_state(SearchState(status=SearchStatus.ERROR, message=None, error=e.message))
            return
        except Exception:
            logger.exception(f"Search for '{term}' failed unexpectedly")
            if self._is_stale(request_id):
                return
            self._set_state(
                SearchState(status=SearchStatus.ERROR, message=None, error=SEARCH_FAILED_MESSAGE)
            )
            return

        if self._is_stale(request_id):
            logger.debug(f"Discarding stale results for '{term}'")
            return

        tracks = list(response.tracks)
        message = None
        if not tracks:
            message = response.message or f"No songs found for “{term}”."
        self._set_state(SearchState(status=SearchStatus.SUCCESS, results=tracks, message=message))

    async def drain(self) -> None:
        """Wait until no search is scheduled or in flight."""
        while self._timer is not None or self._in_flight:
            if self._in_flight:
                await asyncio.gather(*self._in_flight, return_exceptions=True)
            else:
                await asyncio.sleep(min(self._debounce, 0.01))
