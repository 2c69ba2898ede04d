from dataclasses import dataclass
from typing import Iterable

from src.config.logger_config import logger
from src.geosite.domain.decoder import decode_record
from src.geosite.domain.dedup import unique_items
from src.geosite.domain.entities import RuleItem, UpstreamRecord

ATTRIBUTE_SEPARATOR = "@"


@dataclass(frozen=True)
class CategoryMapResult:
    categories: dict[str, list[RuleItem]]
    record_count: int
    dropped_count: int
    collision_codes: tuple[str, ...]
    attribute_category_count: int = 0


def attribute_code(code: str, attribute: str) -> str:
    return f"{code}{ATTRIBUTE_SEPARATOR}{attribute}"


def build_category_map(records: Iterable[UpstreamRecord]) -> CategoryMapResult:
    """Decode every record into one flat code -> unique items map.

    Base codes are lowercased, attribute keys are kept verbatim. When two
    records produce the same key the later one wins; the key is reported in
    ``collision_codes``.
    """
    categories: dict[str, list[RuleItem]] = {}
    collisions: list[str] = []
    attribute_codes: set[str] = set()
    record_count = 0
    dropped_count = 0

    def _put(code: str, items: list[RuleItem], from_attribute: bool = False) -> None:
        if code in categories:
            collisions.append(code)
            logger.warning("Duplicate category code, later record wins: code={}", code)
        categories[code] = unique_items(items)
        if from_attribute:
            attribute_codes.add(code)
        else:
            attribute_codes.discard(code)

    for record in records:
        record_count += 1
        decoded = decode_record(record)
        dropped_count += decoded.dropped_count
        _put(decoded.code, decoded.items)
        for attribute, items in decoded.attribute_items.items():
            _put(attribute_code(decoded.code, attribute), items, from_attribute=True)

    if dropped_count:
        logger.warning("Dropped upstream domain entries with unknown type: dropped_count={}", dropped_count)
    logger.info(
        "Category map built: record_count={}, category_count={}, collision_count={}",
        record_count,
        len(categories),
        len(collisions),
    )
    return CategoryMapResult(
        categories=categories,
        record_count=record_count,
        dropped_count=dropped_count,
        collision_codes=tuple(collisions),
        attribute_category_count=len(attribute_codes),
    )
