"""
Debounced, race-free search over one table.

Typing in the search box or changing filters restarts a quiescence window;
only the state present when the window elapses is fetched. Page changes are
fetched at once. Every fetch carries a sequence number and only the latest
one may publish its result, so a slow early response can never overwrite a
faster later one.

The controller lives on an asyncio event loop; the setters must be called
from code running on that loop.
"""

import asyncio
import logging
from dataclasses import dataclass, replace

from asgiref.sync import sync_to_async
from django.conf import settings

from registry.query.builder import build_predicate
from registry.query.criteria import FilterCriteria
from registry.query.pagination import Paginator

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
READY = "ready"
EMPTY = "empty"
FAILED = "failed"


@dataclass(frozen=True)
class SearchQuery:
    term: str = ""
    criteria: FilterCriteria = FilterCriteria()
    page: int = 1


class SearchController:
    """
    Owns the term, filters and page of one list view and the result shown for them.

    Args:
        fetch: Coroutine function ``fetch(query) -> Page``
        debounce: Quiescence window in seconds
        timeout: Upper bound in seconds for a single fetch
    """

    def __init__(self, fetch, debounce: float = None, timeout: float = None):
        self.fetch = fetch
        if debounce is None:
            debounce = settings.REGISTRY_SEARCH_DEBOUNCE_MS / 1000
        self.debounce = debounce
        self.timeout = timeout if timeout is not None else settings.REGISTRY_SEARCH_TIMEOUT
        self.query = SearchQuery()
        self.status = IDLE
        self.loading = False
        self.result = None
        self.error = None
        self._sequence = 0
        self._pending = None
        self._inflight = set()

    @property
    def items(self) -> list:
        return self.result.items if self.result is not None else []

    @property
    def sequence(self) -> int:
        return self._sequence

    def set_term(self, term: str):
        self.query = replace(self.query, term=term or "", page=1)
        self._schedule()

    def set_filters(self, criteria: FilterCriteria):
        self.query = replace(self.query, criteria=criteria or FilterCriteria(), page=1)
        self._schedule()

    def set_page(self, page: int):
        self._cancel_pending()
        self.query = replace(self.query, page=max(1, int(page)))
        self._dispatch(self.query)

    def refresh(self):
        """Fetch the current state immediately."""
        self._cancel_pending()
        self._dispatch(self.query)

    async def flush(self):
        """Wait until no debounce window is open and no fetch is in flight."""
        while True:
            tasks = [task for task in (self._pending, *self._inflight) if task and not task.done()]
            if not tasks:
                return
            await asyncio.wait(tasks)

    def _cancel_pending(self):
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def _schedule(self):
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self._debounced())

    async def _debounced(self):
        await asyncio.sleep(self.debounce)
        self._pending = None
        self._dispatch(self.query)

    def _dispatch(self, query: SearchQuery):
        self._sequence += 1
        self.loading = True
        self.status = LOADING
        task = asyncio.get_running_loop().create_task(self._run(self._sequence, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self, sequence: int, query: SearchQuery):
        try:
            page = await asyncio.wait_for(self.fetch(query), self.timeout)
        except asyncio.TimeoutError:
            self._fail(sequence, query, f"Search timed out after {self.timeout}s")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._fail(sequence, query, f"Search failed: {str(e)}")
        else:
            if sequence != self._sequence:
                logger.debug(f"Discarding stale result #{sequence} (latest #{self._sequence})")
                return
            self.result = page
            self.error = None
            self.status = READY if page.items else EMPTY
        finally:
            if sequence == self._sequence:
                self.loading = False

    def _fail(self, sequence, query, message):
        if sequence != self._sequence:
            logger.debug(f"Ignoring failure of stale search #{sequence}: {message}")
            return
        logger.error(f"{message} (term={query.term!r}, page={query.page})")
        self.result = None
        self.error = message
        self.status = FAILED


def store_fetcher(search, store, paginator: Paginator = None):
    """Adapt a synchronous store and paginator into a ``fetch`` for ``SearchController``."""
    paginator = paginator or Paginator(store)

    def fetch_page(query: SearchQuery):
        predicate = build_predicate(search, query.term, query.criteria)
        return paginator.get_page(search, predicate, query.page)

    return sync_to_async(fetch_page, thread_sensitive=False)
