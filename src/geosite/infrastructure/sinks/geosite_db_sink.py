"""Writer for the sing-box ``geosite.db`` format.

Layout::

    version        byte (0)
    entry count    uvarint
    per code (sorted):
        code       uvarint length + utf-8 bytes
        offset     uvarint, into the content section
        item count uvarint
    content        per item: type byte + uvarint length + utf-8 value
"""

import io
from pathlib import Path
from typing import Mapping, Sequence

from src.config.logger_config import logger
from src.geosite.application.ports import DatabaseSinkPort
from src.geosite.domain.entities import RuleItem

GEOSITE_DB_VERSION = 0


def _write_uvarint(buffer: io.BytesIO, value: int) -> None:
    while value >= 0x80:
        buffer.write(bytes(((value & 0x7F) | 0x80,)))
        value >>= 7
    buffer.write(bytes((value,)))


def _write_string(buffer: io.BytesIO, value: str) -> None:
    encoded = value.encode("utf-8")
    _write_uvarint(buffer, len(encoded))
    buffer.write(encoded)


def encode_geosite_db(categories: Mapping[str, Sequence[RuleItem]]) -> bytes:
    codes = sorted(categories)
    content = io.BytesIO()
    offsets: dict[str, int] = {}
    for code in codes:
        offsets[code] = content.tell()
        for item in categories[code]:
            content.write(bytes((int(item.rule_type),)))
            _write_string(content, item.value)

    out = io.BytesIO()
    out.write(bytes((GEOSITE_DB_VERSION,)))
    _write_uvarint(out, len(codes))
    for code in codes:
        _write_string(out, code)
        _write_uvarint(out, offsets[code])
        _write_uvarint(out, len(categories[code]))
    out.write(content.getvalue())
    return out.getvalue()


class GeositeDbSink(DatabaseSinkPort):
    def __init__(self, output_path: str | Path) -> None:
        self.output_path = Path(output_path)

    def write(self, categories: Mapping[str, Sequence[RuleItem]]) -> None:
        payload = encode_geosite_db(categories)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("write {}", str(self.output_path.resolve()))
        self.output_path.write_bytes(payload)
        logger.debug("Geosite database written: code_count={}, size={}", len(categories), len(payload))
