"""Protobuf codec for the v2ray ``geosite.dat`` GeoSiteList format.

The message classes are built at import time from a hand-assembled file
descriptor, so no protoc step is needed.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError

from src.config.logger_config import logger
from src.geosite.application.errors import GeositeDecodeError
from src.geosite.application.ports import GeositeDecoderPort
from src.geosite.domain.entities import UpstreamDomain, UpstreamRecord
from src.geosite.domain.types import UpstreamDomainType

PROTO_PACKAGE = "v2ray.core.app.router.routercommon"

_Field = descriptor_pb2.FieldDescriptorProto


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="app/router/routercommon/common.proto",
        package=PROTO_PACKAGE,
        syntax="proto3",
    )

    domain = file_proto.message_type.add(name="Domain")
    domain_type = domain.enum_type.add(name="Type")
    for member in UpstreamDomainType:
        domain_type.value.add(name=_enum_value_name(member), number=int(member))

    attribute = domain.nested_type.add(name="Attribute")
    attribute.oneof_decl.add(name="typed_value")
    attribute.field.add(name="key", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL)
    attribute.field.add(name="bool_value", number=2, type=_Field.TYPE_BOOL, label=_Field.LABEL_OPTIONAL, oneof_index=0)
    attribute.field.add(name="int_value", number=3, type=_Field.TYPE_INT64, label=_Field.LABEL_OPTIONAL, oneof_index=0)

    domain.field.add(
        name="type",
        number=1,
        type=_Field.TYPE_ENUM,
        type_name=f".{PROTO_PACKAGE}.Domain.Type",
        label=_Field.LABEL_OPTIONAL,
    )
    domain.field.add(name="value", number=2, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL)
    domain.field.add(
        name="attribute",
        number=3,
        type=_Field.TYPE_MESSAGE,
        type_name=f".{PROTO_PACKAGE}.Domain.Attribute",
        label=_Field.LABEL_REPEATED,
    )

    geosite = file_proto.message_type.add(name="GeoSite")
    geosite.field.add(name="country_code", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL)
    geosite.field.add(
        name="domain",
        number=2,
        type=_Field.TYPE_MESSAGE,
        type_name=f".{PROTO_PACKAGE}.Domain",
        label=_Field.LABEL_REPEATED,
    )

    geosite_list = file_proto.message_type.add(name="GeoSiteList")
    geosite_list.field.add(
        name="entry",
        number=1,
        type=_Field.TYPE_MESSAGE,
        type_name=f".{PROTO_PACKAGE}.GeoSite",
        label=_Field.LABEL_REPEATED,
    )
    return file_proto


def _enum_value_name(member: UpstreamDomainType) -> str:
    # Proto enum value names as published upstream: Plain, Regex, RootDomain, Full.
    return "".join(part.capitalize() for part in member.name.split("_"))


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_descriptor().SerializeToString())

GeoSiteList = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PROTO_PACKAGE}.GeoSiteList"))


class GeositeProtobufDecoder(GeositeDecoderPort):
    def decode(self, data: bytes) -> list[UpstreamRecord]:
        message = GeoSiteList()
        try:
            message.ParseFromString(data)
        except DecodeError as exc:
            logger.error("Failed to decode geosite data: input_bytes={}, error={}", len(data), exc)
            raise GeositeDecodeError(f"invalid geosite data: {exc}") from exc

        records = [
            UpstreamRecord(
                country_code=entry.country_code,
                domains=tuple(
                    UpstreamDomain(
                        domain_type=int(domain.type),
                        value=domain.value,
                        attributes=tuple(attribute.key for attribute in domain.attribute),
                    )
                    for domain in entry.domain
                ),
            )
            for entry in message.entry
        ]
        logger.debug("Geosite data decoded: record_count={}", len(records))
        return records
