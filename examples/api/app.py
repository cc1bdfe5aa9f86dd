"""API — pure JSON REST API.

CRUD for a simple "items" resource. Demonstrates a signpost route program:
named path parameters, query parameters, req.json() for POST/PUT, and
res.end() to stop evaluation once a response is final.

Run with any ASGI server, e.g.:
    cd examples/api && uvicorn app:app
"""

import threading
from dataclasses import dataclass

from signpost import App, RouterConfig

app = App(config=RouterConfig(base_path="/api"))


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(item: Item) -> dict:
    return {"id": item.id, "title": item.title, "done": item.done}


def _lookup(req, res) -> Item:
    """Return the item named by ``:item_id`` or answer 404 and end."""
    try:
        item_id = int(req.params["item_id"])
    except ValueError:
        item_id = -1
    with _lock:
        item = _items.get(item_id)
    if item is None:
        res.set_status(404).json({"error": 404, "msg": "not found"}).end()
    return item


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def list_items(req, res) -> None:
    """List items with optional limit and offset."""
    limit = min(max(req.query.get_int("limit", default=50) or 50, 1), 100)
    offset = max(req.query.get_int("offset", default=0) or 0, 0)

    with _lock:
        all_items = sorted(_items.values(), key=lambda x: x.id)
    page = all_items[offset : offset + limit]

    res.json(
        {
            "data": [_to_dict(i) for i in page],
            "meta": {"limit": limit, "offset": offset, "total": len(all_items)},
        },
        end=True,
    )


def get_item(req, res) -> None:
    """Get a single item by ID."""
    item = _lookup(req, res)
    res.json({"data": _to_dict(item)}, end=True)


def create_item(req, res) -> None:
    """Create a new item."""
    try:
        body = req.json()
    except ValueError:
        res.set_status(400).json({"error": 400, "msg": "invalid JSON body"}).end()
    title = str(body.get("title", "")).strip()
    if not title:
        res.set_status(400).json({"error": 400, "msg": "title is required"}).end()

    item = Item(id=_get_next_id(), title=title, done=False)
    with _lock:
        _items[item.id] = item

    res.set_status(201).json({"data": _to_dict(item)}, end=True)


def update_item(req, res) -> None:
    """Update an existing item."""
    item = _lookup(req, res)
    body = req.json()
    raw_title = body.get("title")
    raw_done = body.get("done")
    title = str(raw_title).strip() if raw_title is not None else item.title
    done = bool(raw_done) if raw_done is not None else item.done

    updated = Item(id=item.id, title=title, done=done)
    with _lock:
        _items[item.id] = updated

    res.json({"data": _to_dict(updated)}, end=True)


def delete_item(req, res) -> None:
    """Delete an item."""
    item = _lookup(req, res)
    with _lock:
        _items.pop(item.id, None)
    res.json({"data": _to_dict(item)}, end=True)


def whoami(req, res) -> None:
    """Echo the caller's address and the raw URL."""
    res.set_header("X-Original-Url", req.original_url).json({"ip": req.ip}, end=True)


# ---------------------------------------------------------------------------
# Route program
# ---------------------------------------------------------------------------


@app.routes
def routes(router) -> None:
    router.get("/items", list_items)
    router.get("/items/:item_id", get_item)
    router.post("/items", create_item)
    router.put("/items/:item_id", update_item)
    router.delete("/items/:item_id", delete_item)
    router.get("/whoami", whoami)

    # Unmatched requests pass through untouched, so answer 404 explicitly.
    if not router.resolved:
        router.response.set_status(404).json({"error": 404, "msg": "not found"})
