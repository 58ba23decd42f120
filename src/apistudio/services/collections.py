"""Collection management: creating, finding and saving requests."""

from apistudio.models.requests import ApiRequest, Collection, utc_now

DEFAULT_COLLECTION = "My Requests"


def new_request(name: str = "Untitled Request") -> ApiRequest:
    """Create a blank GET request."""
    return ApiRequest(name=name)


def new_collection(name: str = "New Collection", description: str = "") -> Collection:
    """Create an empty collection."""
    return Collection(name=name, description=description)


def find_collection(collections: list[Collection], ref: str) -> Collection:
    """Find a collection by id or name.

    Raises:
        ValueError: If no collection matches
    """
    for collection in collections:
        if ref in (collection.id, collection.name):
            return collection
    raise ValueError(f"Collection not found: {ref}")


def find_request(
    collections: list[Collection],
    ref: str,
    collection_ref: str | None = None,
) -> tuple[Collection, ApiRequest]:
    """Find a request by id or name, optionally within one collection.

    Returns:
        The owning collection and the request

    Raises:
        ValueError: If no request matches
    """
    candidates = collections
    if collection_ref is not None:
        candidates = [find_collection(collections, collection_ref)]

    for collection in candidates:
        for request in collection.requests:
            if ref in (request.id, request.name):
                return collection, request
    raise ValueError(f"Request not found: {ref}")


def save_request(
    collections: list[Collection],
    request: ApiRequest,
    collection_id: str | None = None,
    default_collection: str = DEFAULT_COLLECTION,
) -> list[Collection]:
    """Persist a request into its collection.

    With a ``collection_id`` the request replaces the one with the same id in
    that collection, or is appended to it. Without one, the request goes to
    the collection named ``default_collection``, which is created if missing.
    Both the request and the collection get a fresh ``updated_at``.

    Raises:
        ValueError: If ``collection_id`` does not match any collection
    """
    saved = request.touch()

    if collection_id is None:
        existing = next((c for c in collections if c.name == default_collection), None)
        if existing is None:
            created = new_collection(default_collection).model_copy(update={"requests": [saved]})
            return [*collections, created]
        collection_id = existing.id

    if not any(c.id == collection_id for c in collections):
        raise ValueError(f"Collection not found: {collection_id}")

    result: list[Collection] = []
    for collection in collections:
        if collection.id == collection_id:
            if any(r.id == saved.id for r in collection.requests):
                requests = [saved if r.id == saved.id else r for r in collection.requests]
            else:
                requests = [*collection.requests, saved]
            collection = collection.model_copy(update={"requests": requests, "updated_at": utc_now()})
        result.append(collection)
    return result


def delete_request(collections: list[Collection], request_id: str) -> list[Collection]:
    """Remove a request from whichever collection owns it."""
    return [
        c.model_copy(update={"requests": [r for r in c.requests if r.id != request_id]})
        if any(r.id == request_id for r in c.requests)
        else c
        for c in collections
    ]
