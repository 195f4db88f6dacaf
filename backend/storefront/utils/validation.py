from storefront.db import MAX_ROW_ID
from storefront.exceptions import ValidationError


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_row_id(value, what: str) -> None:
    """Reject ids that cannot name a row before they reach a query."""
    if not is_int(value) or not 1 <= value <= MAX_ROW_ID:
        raise ValidationError(f"{what} must be an integer between 1 and {MAX_ROW_ID}")
