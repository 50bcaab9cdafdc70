from neighborgood.formatting.dates import DEFAULT_DISPLAY_FORMAT, format_date, parse_timestamp

__all__ = ["format_date", "parse_timestamp", "DEFAULT_DISPLAY_FORMAT"]
