from treasury.utils.validators import month_key, validate_month, parse_amount, validate_resident_type

__all__ = ["month_key", "validate_month", "parse_amount", "validate_resident_type"]
