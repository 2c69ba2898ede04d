import unittest

from src.geosite.application.errors import GeositeDecodeError
from src.geosite.domain.entities import UpstreamDomain, UpstreamRecord
from src.geosite.domain.types import UpstreamDomainType
from src.geosite.infrastructure.geosite_codec import GeoSiteList, GeositeProtobufDecoder
from tests.utils.geosite_fixtures import encode_records


class GeositeProtobufDecoderTests(unittest.TestCase):
    def test_decodes_records_with_attributes(self):
        message = GeoSiteList()
        entry = message.entry.add()
        entry.country_code = "CN"
        domain = entry.domain.add()
        domain.type = int(UpstreamDomainType.ROOT_DOMAIN)
        domain.value = "baidu.com"
        domain.attribute.add(key="ads", bool_value=True)
        domain.attribute.add(key="cn", int_value=1)
        plain = entry.domain.add()
        plain.value = "keyword"

        records = GeositeProtobufDecoder().decode(message.SerializeToString())

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].country_code, "CN")
        self.assertEqual(
            records[0].domains,
            (
                UpstreamDomain(int(UpstreamDomainType.ROOT_DOMAIN), "baidu.com", ("ads", "cn")),
                UpstreamDomain(int(UpstreamDomainType.PLAIN), "keyword", ()),
            ),
        )

    def test_encode_records_is_readable_by_decoder(self):
        records = [
            UpstreamRecord(
                country_code="geo",
                domains=(UpstreamDomain(int(UpstreamDomainType.FULL), "a.cn", ("cn",)),),
            )
        ]
        self.assertEqual(GeositeProtobufDecoder().decode(encode_records(records)), records)

    def test_empty_blob_has_no_records(self):
        self.assertEqual(GeositeProtobufDecoder().decode(b""), [])

    def test_truncated_blob_raises_decode_error(self):
        with self.assertRaises(GeositeDecodeError):
            GeositeProtobufDecoder().decode(b"\x0a\x05\x0a")
