"""Id allocation for entities created by the in-memory collaborator."""


def prefixed_id(prefix: str, existing: list[str]) -> str:
    """Next id for prefix: one past the highest integer suffix in use.

    Ids with another prefix or a non-numeric suffix are ignored, so
    ``prefixed_id("c", ["c", "cx", "c9", "l40"])`` is ``"c10"``.
    """
    highest = 0
    for id_ in existing:
        suffix = id_[len(prefix) :]
        if id_.startswith(prefix) and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1}"
