from .normalize import normalize_groups, normalize_pair, normalize_records, normalize_values

__all__ = ["normalize_groups", "normalize_pair", "normalize_records", "normalize_values"]
