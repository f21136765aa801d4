# tests/test_search.py
import asyncio

from freshcart.errors import ApiError
from freshcart.search import RESULT_LIMIT, SUGGESTION_LIMIT, ProductSearch

DELAY = 0.01

CATALOG = ["Apple", "Apple Juice", "Milk", "Milk Powder", "Bread"]


class FakeSearchApi:
    def __init__(self, latency=0.0):
        self.calls = []
        self.latency = latency
        self.fail = False
        self.answer = None

    async def search_products(self, name, limit):
        self.calls.append((name, limit))
        if self.latency:
            await asyncio.sleep(self.latency)
        if self.fail:
            raise ApiError("Something went wrong", status_code=500)
        if self.answer is not None:
            return self.answer()
        hits = [n for n in CATALOG if name.lower() in n.lower()][:limit]
        return {"products": [{"_id": n.lower(), "name": n, "price": 10} for n in hits]}


def test_only_last_query_in_a_burst_is_fetched():
    async def scenario():
        api = FakeSearchApi()
        search = ProductSearch(api, delay=DELAY)
        for text in ("m", "mi", "mil"):
            search.set_query(text)
        await asyncio.sleep(DELAY * 5)
        await search.flush()
        return api, search

    api, search = asyncio.run(scenario())
    assert api.calls == [("mil", SUGGESTION_LIMIT), ("mil", RESULT_LIMIT)]
    assert [p.name for p in search.results] == ["Milk", "Milk Powder"]


def test_blank_query_clears_without_fetching():
    async def scenario():
        api = FakeSearchApi()
        updates = []
        search = ProductSearch(api, delay=DELAY, on_update=lambda s: updates.append(list(s.results)))
        search.set_query("apple")
        await search.flush()
        search.set_query("bread")
        search.set_query("   ")
        await asyncio.sleep(DELAY * 5)
        return api, search, updates

    api, search, updates = asyncio.run(scenario())
    assert [name for name, _ in api.calls] == ["apple", "apple"]
    assert search.suggestions == [] and search.results == []
    assert len(updates) == 2 and updates[-1] == []


def test_stale_results_are_dropped():
    async def scenario():
        api = FakeSearchApi(latency=DELAY * 2)
        seen = []
        search = ProductSearch(api, delay=DELAY, on_update=lambda s: seen.append([p.name for p in s.results]))
        search.set_query("apple")
        slow = asyncio.ensure_future(search.flush())
        await asyncio.sleep(DELAY)
        search.set_query("milk")
        await slow
        await search.flush()
        return seen, search

    seen, search = asyncio.run(scenario())
    assert seen == [["Milk", "Milk Powder"]]
    assert [p.name for p in search.results] == ["Milk", "Milk Powder"]


def test_failed_search_clears_lists():
    async def scenario():
        api = FakeSearchApi()
        search = ProductSearch(api, delay=DELAY)
        search.set_query("apple")
        await search.flush()
        before = len(search.results)
        api.fail = True
        search.set_query("apples")
        await search.flush()
        return before, search

    before, search = asyncio.run(scenario())
    assert before == 2
    assert search.suggestions == [] and search.results == []


def refresh_with(answer):
    async def scenario():
        api = FakeSearchApi()
        search = ProductSearch(api, delay=DELAY)
        search.set_query("apple")
        await search.flush()
        before = (len(search.suggestions), len(search.results))
        api.answer = answer
        search.set_query("apples")
        await search.flush()
        return before, search

    return asyncio.run(scenario())


def test_malformed_products_clear_lists():
    before, search = refresh_with(lambda: {"products": [{"_id": "x", "price": "not a price"}]})
    assert before == (2, 2)
    assert search.suggestions == [] and search.results == []


def test_signed_out_search_clears_lists():
    # a signed-out client answers None instead of a body
    before, search = refresh_with(lambda: None)
    assert before == (2, 2)
    assert search.suggestions == [] and search.results == []
