import json
import shutil
from pathlib import Path
from typing import Any

from pathvalidate import sanitize_filename

from src.config.logger_config import logger
from src.geosite.application.errors import ArtifactWriteError
from src.geosite.application.ports import RuleSetSinkPort
from src.geosite.domain.entities import CompiledRuleBuckets

RULE_SET_VERSION = 1
RULE_SET_PREFIX = "geosite-"


def make_rule_set_filename(code: str, suffix: str) -> str:
    return sanitize_filename(f"{RULE_SET_PREFIX}{code}{suffix}", replacement_text="_")


def claim_rule_set_filename(claimed: dict[str, str], code: str, suffix: str) -> str:
    """Resolve the file name for ``code`` and record it in ``claimed``.

    Sanitizing can fold distinct codes (``a:b``, ``a*b``) onto one name; the
    second such code raises instead of overwriting the first file.
    """
    filename = make_rule_set_filename(code, suffix)
    owner = claimed.setdefault(filename, code)
    if owner != code:
        raise ArtifactWriteError(f"rule-set file name collision: {owner!r} and {code!r} both resolve to {filename}")
    return filename


def build_rule_set_document(buckets: CompiledRuleBuckets) -> dict[str, Any]:
    rule: dict[str, Any] = {}
    for key, values in buckets.to_dict().items():
        if not values:
            continue
        # sing-box list fields collapse a single value to a bare string.
        rule[key] = values[0] if len(values) == 1 else values
    return {"version": RULE_SET_VERSION, "rules": [rule]}


def render_rule_set_json(buckets: CompiledRuleBuckets) -> str:
    return json.dumps(build_rule_set_document(buckets), ensure_ascii=False, indent=4) + "\n"


def reset_output_dir(output_dir: Path) -> None:
    shutil.rmtree(output_dir, ignore_errors=True)
    output_dir.mkdir(parents=True, exist_ok=True)


class JsonRuleSetSink(RuleSetSinkPort):
    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)
        self.written_count = 0
        self._claimed: dict[str, str] = {}

    def prepare(self) -> None:
        reset_output_dir(self.output_dir)
        self._claimed.clear()

    def write_rule_set(self, code: str, buckets: CompiledRuleBuckets) -> None:
        target_path = self.output_dir / claim_rule_set_filename(self._claimed, code, ".json")
        logger.info("write {}", str(target_path.resolve()))
        with target_path.open("w", encoding="utf-8") as fp:
            fp.write(render_rule_set_json(buckets))
        self.written_count += 1

    def close(self) -> None:
        logger.info(
            "JSON rule-set sink closed: output_dir={}, written_count={}",
            str(self.output_dir),
            self.written_count,
        )
