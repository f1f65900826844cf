"""Category grouping"""
from typing import Dict, Iterable, List

from multitimer.models.timer import Timer


def group_by_category(timers: Iterable[Timer]) -> Dict[str, List[Timer]]:
    """
    Partition timers by category.

    Categories appear in first-seen order and timers keep their relative
    order inside each group, so concatenating the groups gives back the input.
    """
    groups: Dict[str, List[Timer]] = {}
    for timer in timers:
        groups.setdefault(timer.category, []).append(timer)
    return groups
