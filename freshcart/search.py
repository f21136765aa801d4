# freshcart/search.py
import logging
from typing import Any, Callable, List, Optional

import pydantic

from .cart_sync import Debouncer
from .errors import ApiError
from .models import Product

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 5
RESULT_LIMIT = 24


def _products(response: Any) -> Optional[List[Product]]:
    if isinstance(response, dict) and isinstance(response.get("products"), list):
        return [Product.model_validate(p) for p in response["products"]]
    return None


class ProductSearch:
    """Search-as-you-type: only the last query in a burst hits the API."""

    def __init__(self, client, delay: float = 0.3, on_update: Optional[Callable[["ProductSearch"], None]] = None):
        self.client = client
        self.query = ""
        self.suggestions: List[Product] = []
        self.results: List[Product] = []
        self.on_update = on_update
        self._debouncer = Debouncer(delay, self._fetch)

    def set_query(self, text: str):
        if text == self.query:
            return
        self.query = text
        if not text.strip():
            self._debouncer.cancel()
            self._set([], [])
            return
        self._debouncer.trigger()

    async def flush(self):
        """Run the pending lookup now instead of waiting out the delay."""
        if self._debouncer.pending:
            self._debouncer.cancel()
            await self._fetch()
        await self._debouncer.drain()

    def _set(self, suggestions: List[Product], results: List[Product]):
        self.suggestions = suggestions
        self.results = results
        if self.on_update:
            self.on_update(self)

    async def _fetch(self):
        query = self.query
        if not query.strip():
            return
        try:
            suggestions = _products(await self.client.search_products(query, SUGGESTION_LIMIT))
            results = _products(await self.client.search_products(query, RESULT_LIMIT))
        except (ApiError, pydantic.ValidationError) as e:
            logger.warning("search for %r failed: %s", query, e)
            suggestions = results = None
        if query != self.query:
            logger.debug("dropping stale results for %r", query)
            return
        # no session or an unexpected body clears both lists too
        self._set(suggestions or [], results or [])
