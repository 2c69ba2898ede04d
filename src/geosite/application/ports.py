from typing import Mapping, Protocol, Sequence, runtime_checkable

import aiohttp

from src.geosite.application.contracts import ReleaseInfo
from src.geosite.domain.entities import CompiledRuleBuckets, RuleItem, UpstreamRecord


@runtime_checkable
class GeositeDecoderPort(Protocol):
    def decode(self, data: bytes) -> list[UpstreamRecord]: ...
    """Parse the upstream blob into records, raising GeositeDecodeError on failure."""


@runtime_checkable
class ReleaseSourcePort(Protocol):
    async def fetch_latest_release(self, session: aiohttp.ClientSession, repository: str) -> ReleaseInfo: ...
    """Return the latest release of ``owner/name``."""

    async def download(self, session: aiohttp.ClientSession, url: str) -> bytes: ...
    """Download one release asset."""


@runtime_checkable
class DatabaseSinkPort(Protocol):
    def write(self, categories: Mapping[str, Sequence[RuleItem]]) -> None: ...
    """Persist a code -> items mapping as one database artifact."""


@runtime_checkable
class RuleSetSinkPort(Protocol):
    def prepare(self) -> None: ...
    """Reset the output location before the first rule-set is written."""

    def write_rule_set(self, code: str, buckets: CompiledRuleBuckets) -> None: ...
    """Write the artifact(s) for one category."""

    def close(self) -> None: ...
    """Release resources."""


@runtime_checkable
class ActionOutputPort(Protocol):
    def set_output(self, name: str, value: str) -> None: ...
