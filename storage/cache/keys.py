import hashlib
import json


def make_cache_key(filters: dict, namespace: str = "flights") -> str:
    payload = json.dumps(filters, sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    return f"flightquery:{namespace}:{digest}"
