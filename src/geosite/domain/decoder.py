"""Mapping of upstream geosite domain entries onto sing-box rule items."""

from dataclasses import dataclass, field
from typing import Sequence

from src.geosite.domain.entities import RuleItem, UpstreamDomain, UpstreamRecord
from src.geosite.domain.types import RuleType, UpstreamDomainType

KNOWN_DOMAIN_TYPES = frozenset(int(member) for member in UpstreamDomainType)


@dataclass(frozen=True)
class DecodedRecord:
    code: str
    items: list[RuleItem]
    attribute_items: dict[str, list[RuleItem]] = field(default_factory=dict)
    dropped_count: int = 0


def is_known_type(domain: UpstreamDomain) -> bool:
    return domain.domain_type in KNOWN_DOMAIN_TYPES


def map_domain(domain: UpstreamDomain) -> list[RuleItem]:
    """Translate one upstream entry; unknown types yield no items."""
    domain_type = domain.domain_type
    value = domain.value
    if domain_type == UpstreamDomainType.PLAIN:
        return [RuleItem(RuleType.DOMAIN_KEYWORD, value)]
    if domain_type == UpstreamDomainType.REGEX:
        return [RuleItem(RuleType.DOMAIN_REGEX, value)]
    if domain_type == UpstreamDomainType.ROOT_DOMAIN:
        items: list[RuleItem] = []
        # A dotless root ("cn") only makes sense as a suffix.
        if "." in value:
            items.append(RuleItem(RuleType.DOMAIN, value))
        items.append(RuleItem(RuleType.DOMAIN_SUFFIX, "." + value))
        return items
    if domain_type == UpstreamDomainType.FULL:
        return [RuleItem(RuleType.DOMAIN, value)]
    return []


def map_domains(domains: Sequence[UpstreamDomain]) -> list[RuleItem]:
    items: list[RuleItem] = []
    for domain in domains:
        items.extend(map_domain(domain))
    return items


def group_by_attribute(domains: Sequence[UpstreamDomain]) -> dict[str, list[UpstreamDomain]]:
    grouped: dict[str, list[UpstreamDomain]] = {}
    for domain in domains:
        for attribute in domain.attributes:
            grouped.setdefault(attribute, []).append(domain)
    return grouped


def decode_record(record: UpstreamRecord) -> DecodedRecord:
    """Decode one category record into base items and per-attribute items.

    Entries carrying attributes stay in the base list and are also mapped,
    independently, into every one of their attribute lists. Items are not
    deduplicated here.
    """
    grouped = group_by_attribute(record.domains)
    attribute_items = {attribute: map_domains(entries) for attribute, entries in grouped.items()}
    dropped_count = sum(1 for domain in record.domains if not is_known_type(domain))
    return DecodedRecord(
        code=record.country_code.lower(),
        items=map_domains(record.domains),
        attribute_items=attribute_items,
        dropped_count=dropped_count,
    )
