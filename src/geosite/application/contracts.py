from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseInfo:
    repository: str
    name: str
    tag_name: str
    assets: tuple[ReleaseAsset, ...] = field(default_factory=tuple)

    def find_asset(self, name: str) -> ReleaseAsset | None:
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


@dataclass(frozen=True)
class PipelineSummary:
    record_count: int
    category_count: int
    attribute_category_count: int
    dropped_count: int
    collision_count: int
    subset_codes: tuple[str, ...]
    rule_set_count: int
    duration_ms: int
    generated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_count": self.record_count,
            "category_count": self.category_count,
            "attribute_category_count": self.attribute_category_count,
            "dropped_count": self.dropped_count,
            "collision_count": self.collision_count,
            "subset_codes": list(self.subset_codes),
            "rule_set_count": self.rule_set_count,
            "duration_ms": self.duration_ms,
            "generated_at": self.generated_at,
        }
