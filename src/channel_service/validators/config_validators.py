def normalize_case(value: str | None, *, upper: bool = True) -> str | None:
    """
    Upper- or lower-case an environment value, leaving None (unset) untouched.
    Surrounding whitespace from hand-edited .env files is stripped too.
    """
    if value is None:
        return None
    value = value.strip()
    return value.upper() if upper else value.lower()
