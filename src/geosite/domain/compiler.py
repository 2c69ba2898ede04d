from typing import Iterable

from src.geosite.domain.entities import CompiledRuleBuckets, RuleItem
from src.geosite.domain.types import RuleType


def compile_rule_items(items: Iterable[RuleItem]) -> CompiledRuleBuckets:
    """Partition a category's items into the four matcher buckets.

    Relative order inside each bucket follows the input. Input is expected
    to be deduplicated already.
    """
    buckets: dict[RuleType, list[str]] = {rule_type: [] for rule_type in RuleType}
    for item in items:
        buckets[item.rule_type].append(item.value)
    return CompiledRuleBuckets(
        domain=tuple(buckets[RuleType.DOMAIN]),
        domain_suffix=tuple(buckets[RuleType.DOMAIN_SUFFIX]),
        domain_keyword=tuple(buckets[RuleType.DOMAIN_KEYWORD]),
        domain_regex=tuple(buckets[RuleType.DOMAIN_REGEX]),
    )
