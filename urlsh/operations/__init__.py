from urlsh.operations.assignment import Assignment, assign_code, generate_unique_shortcode, initial_length
from urlsh.operations.lifecycle import StoreStats, expand, list_entries, compute_store_stats, clean, delete


__all__ = [
    'Assignment',
    'assign_code',
    'generate_unique_shortcode',
    'initial_length',
    'StoreStats',
    'expand',
    'list_entries',
    'compute_store_stats',
    'clean',
    'delete',
]
