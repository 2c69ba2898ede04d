from dataclasses import dataclass, field

from src.geosite.domain.types import RuleType


@dataclass(frozen=True)
class RuleItem:
    rule_type: RuleType
    value: str


@dataclass(frozen=True)
class UpstreamDomain:
    # Raw integer so that types unknown to UpstreamDomainType survive decoding.
    domain_type: int
    value: str
    attributes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpstreamRecord:
    country_code: str
    domains: tuple[UpstreamDomain, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CompiledRuleBuckets:
    domain: tuple[str, ...] = ()
    domain_suffix: tuple[str, ...] = ()
    domain_keyword: tuple[str, ...] = ()
    domain_regex: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "domain": list(self.domain),
            "domain_suffix": list(self.domain_suffix),
            "domain_keyword": list(self.domain_keyword),
            "domain_regex": list(self.domain_regex),
        }

    def is_empty(self) -> bool:
        return not (self.domain or self.domain_suffix or self.domain_keyword or self.domain_regex)
