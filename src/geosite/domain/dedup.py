from typing import Iterable

from src.geosite.domain.entities import RuleItem


def unique_items(items: Iterable[RuleItem]) -> list[RuleItem]:
    """Drop structural duplicates, keeping the first occurrence in place."""
    seen: set[RuleItem] = set()
    result: list[RuleItem] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
