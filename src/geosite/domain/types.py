from enum import IntEnum


class RuleType(IntEnum):
    # Values are the item type bytes of the sing-box geosite database.
    DOMAIN = 0
    DOMAIN_SUFFIX = 1
    DOMAIN_KEYWORD = 2
    DOMAIN_REGEX = 3


class UpstreamDomainType(IntEnum):
    PLAIN = 0
    REGEX = 1
    ROOT_DOMAIN = 2
    FULL = 3
