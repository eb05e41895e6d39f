"""
Wrap-around cursor arithmetic shared by every menu level
"""


def select_next(index, count):
    """
    Move to the next item, wrapping to the first one at the end
    
    Args:
        index: Current zero-based index
        count: Number of items in the list
        
    Returns:
        int: New index, 0 when the list is empty
    """
    if count <= 0:
        return 0
    return (index + 1) % count


def select_previous(index, count):
    """
    Move to the previous item, wrapping to the last one at the start
    
    Args:
        index: Current zero-based index
        count: Number of items in the list
        
    Returns:
        int: New index, 0 when the list is empty
    """
    if count <= 0:
        return 0
    return (index - 1 + count) % count


def clamp_index(index, count):
    """Pull a possibly stale index back into [0, count)"""
    if count <= 0:
        return 0
    return min(max(index, 0), count - 1)
