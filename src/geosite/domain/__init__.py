"""Domain model and deterministic transformation rules for geosite data."""

from src.geosite.domain.category_map import CategoryMapResult, build_category_map
from src.geosite.domain.compiler import compile_rule_items
from src.geosite.domain.decoder import DecodedRecord, decode_record, map_domain
from src.geosite.domain.dedup import unique_items
from src.geosite.domain.entities import CompiledRuleBuckets, RuleItem, UpstreamDomain, UpstreamRecord
from src.geosite.domain.subset import CN_SUBSET_CODES, select_subset
from src.geosite.domain.types import RuleType, UpstreamDomainType

__all__ = [
    "build_category_map",
    "CategoryMapResult",
    "CN_SUBSET_CODES",
    "compile_rule_items",
    "CompiledRuleBuckets",
    "decode_record",
    "DecodedRecord",
    "map_domain",
    "RuleItem",
    "RuleType",
    "select_subset",
    "unique_items",
    "UpstreamDomain",
    "UpstreamDomainType",
    "UpstreamRecord",
]
