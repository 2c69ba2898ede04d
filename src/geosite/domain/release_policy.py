from dataclasses import dataclass


@dataclass(frozen=True)
class ReleaseDecision:
    should_generate: bool
    reason: str


def evaluate_release_decision(
    source_name: str,
    destination_name: str | None,
    force: bool = False,
) -> ReleaseDecision:
    if force:
        return ReleaseDecision(should_generate=True, reason="forced")
    if destination_name is None:
        return ReleaseDecision(should_generate=True, reason="destination_missing")
    # Destination releases are named after the upstream release they were built from.
    if source_name in destination_name:
        return ReleaseDecision(should_generate=False, reason="already_latest")
    return ReleaseDecision(should_generate=True, reason="source_newer")
