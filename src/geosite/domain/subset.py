from typing import Iterable, Mapping, Sequence

from src.geosite.domain.entities import RuleItem

CN_SUBSET_CODES: tuple[str, ...] = (
    "cn",
    "geolocation-!cn",
    "category-companies@cn",
)


def select_subset(
    categories: Mapping[str, Sequence[RuleItem]],
    codes: Iterable[str] = CN_SUBSET_CODES,
) -> dict[str, list[RuleItem]]:
    # Absent codes are carried forward as empty entries.
    return {code: list(categories.get(code, ())) for code in codes}
