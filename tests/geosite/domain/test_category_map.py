import unittest

from src.geosite.domain.category_map import build_category_map
from src.geosite.domain.entities import RuleItem, UpstreamDomain, UpstreamRecord
from src.geosite.domain.types import RuleType, UpstreamDomainType

FULL = int(UpstreamDomainType.FULL)
PLAIN = int(UpstreamDomainType.PLAIN)


class BuildCategoryMapTests(unittest.TestCase):
    def test_attribute_fan_out(self):
        record = UpstreamRecord(
            country_code="Tracker",
            domains=(
                UpstreamDomain(FULL, "a.com", ("ads",)),
                UpstreamDomain(PLAIN, "b", ("ads",)),
                UpstreamDomain(FULL, "c.com"),
            ),
        )
        result = build_category_map([record])
        self.assertEqual(list(result.categories), ["tracker", "tracker@ads"])
        self.assertEqual(
            result.categories["tracker@ads"],
            [RuleItem(RuleType.DOMAIN, "a.com"), RuleItem(RuleType.DOMAIN_KEYWORD, "b")],
        )
        self.assertEqual(len(result.categories["tracker"]), 3)
        self.assertEqual(result.attribute_category_count, 1)

    def test_geo_with_cn_attribute(self):
        record = UpstreamRecord(country_code="geo", domains=(UpstreamDomain(FULL, "a.cn", ("cn",)),))
        result = build_category_map([record])
        self.assertEqual(result.categories["geo"], [RuleItem(RuleType.DOMAIN, "a.cn")])
        self.assertEqual(result.categories["geo@cn"], [RuleItem(RuleType.DOMAIN, "a.cn")])

    def test_attribute_key_is_not_lowercased(self):
        record = UpstreamRecord(country_code="GEO", domains=(UpstreamDomain(FULL, "a.cn", ("CN",)),))
        result = build_category_map([record])
        self.assertIn("geo@CN", result.categories)

    def test_items_are_deduplicated(self):
        record = UpstreamRecord(
            country_code="x",
            domains=(
                UpstreamDomain(FULL, "a.com", ("t",)),
                UpstreamDomain(FULL, "a.com", ("t",)),
            ),
        )
        result = build_category_map([record])
        self.assertEqual(result.categories["x"], [RuleItem(RuleType.DOMAIN, "a.com")])
        self.assertEqual(result.categories["x@t"], [RuleItem(RuleType.DOMAIN, "a.com")])

    def test_duplicate_code_last_record_wins_and_is_reported(self):
        records = [
            UpstreamRecord(country_code="dup", domains=(UpstreamDomain(FULL, "first.com"),)),
            UpstreamRecord(country_code="DUP", domains=(UpstreamDomain(FULL, "second.com"),)),
        ]
        result = build_category_map(records)
        self.assertEqual(result.categories["dup"], [RuleItem(RuleType.DOMAIN, "second.com")])
        self.assertEqual(result.collision_codes, ("dup",))
        self.assertEqual(result.record_count, 2)

    def test_dropped_entries_are_summed(self):
        records = [
            UpstreamRecord(country_code="a", domains=(UpstreamDomain(7, "x"),)),
            UpstreamRecord(country_code="b", domains=(UpstreamDomain(8, "y"), UpstreamDomain(FULL, "z.com"))),
        ]
        result = build_category_map(records)
        self.assertEqual(result.dropped_count, 2)
        self.assertEqual(result.categories["a"], [])

    def test_attribute_count_ignores_base_codes_containing_separator(self):
        records = [
            UpstreamRecord(country_code="odd@name", domains=(UpstreamDomain(FULL, "a.com"),)),
            UpstreamRecord(country_code="geo", domains=(UpstreamDomain(FULL, "b.com", ("cn",)),)),
        ]
        result = build_category_map(records)
        self.assertEqual(list(result.categories), ["odd@name", "geo", "geo@cn"])
        self.assertEqual(result.attribute_category_count, 1)

    def test_base_code_overwriting_attribute_key_is_not_counted(self):
        records = [
            UpstreamRecord(country_code="geo", domains=(UpstreamDomain(FULL, "b.com", ("cn",)),)),
            UpstreamRecord(country_code="geo@cn", domains=(UpstreamDomain(FULL, "c.com"),)),
        ]
        result = build_category_map(records)
        self.assertEqual(result.categories["geo@cn"], [RuleItem(RuleType.DOMAIN, "c.com")])
        self.assertEqual(result.collision_codes, ("geo@cn",))
        self.assertEqual(result.attribute_category_count, 0)
