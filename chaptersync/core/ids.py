import hashlib


def generate_uid(source: str, url: str) -> int:
    """Stable signed 64-bit id for an entity of ``source`` located at ``url``.

    Saved copies keep the ids of the provider they were downloaded from, so
    chapters of both copies can be matched by id.
    """
    digest = hashlib.md5(f"{source}:{url}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)
