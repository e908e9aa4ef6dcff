"""
Formatting utilities for display.
"""


def format_file_size(size_bytes: int) -> str:
    """
    Format a document size for the index listing.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted size string (e.g., "1.5 KB")
    """
    if size_bytes is None:
        return 'N/A'
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def format_version_label(index: int, total: int) -> str:
    """Label a history snapshot, e.g. 'Version 2 of 3'."""
    return f"Version {index} of {total}"


def pluralize(count: int, singular: str, plural: str = None) -> str:
    """
    Pluralize a word based on count, e.g. '1 document' / '3 documents'.
    """
    if plural is None:
        plural = singular + 's'
    return f"{count} {singular if count == 1 else plural}"
