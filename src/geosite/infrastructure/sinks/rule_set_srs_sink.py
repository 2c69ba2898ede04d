import subprocess
import tempfile
from pathlib import Path

from src.config.logger_config import logger
from src.geosite.application.errors import ArtifactWriteError
from src.geosite.application.ports import RuleSetSinkPort
from src.geosite.domain.entities import CompiledRuleBuckets
from src.geosite.infrastructure.sinks.rule_set_json_sink import (
    claim_rule_set_filename,
    make_rule_set_filename,
    render_rule_set_json,
)


class SrsRuleSetSink(RuleSetSinkPort):
    """Binary rule-sets, compiled by ``sing-box rule-set compile``."""

    def __init__(self, output_dir: str | Path, sing_box_path: str = "sing-box") -> None:
        self.output_dir = Path(output_dir)
        self.sing_box_path = sing_box_path
        self.written_count = 0
        self._claimed: dict[str, str] = {}
        self._work_dir: tempfile.TemporaryDirectory | None = None

    def prepare(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._claimed.clear()
        self._work_dir = tempfile.TemporaryDirectory(prefix="geosite_srs_")

    def write_rule_set(self, code: str, buckets: CompiledRuleBuckets) -> None:
        if self._work_dir is None:
            self.prepare()
        target_path = self.output_dir / claim_rule_set_filename(self._claimed, code, ".srs")
        source_path = Path(self._work_dir.name) / make_rule_set_filename(code, ".json")
        source_path.write_text(render_rule_set_json(buckets), encoding="utf-8")

        logger.info("write {}", str(target_path.resolve()))
        cmd = [self.sing_box_path, "rule-set", "compile", str(source_path), "-o", str(target_path)]
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise ArtifactWriteError(f"sing-box binary not found: {self.sing_box_path}") from exc
        except subprocess.CalledProcessError as exc:
            logger.error("sing-box rule-set compile failed: code={}, stderr={}", code, exc.stderr)
            raise ArtifactWriteError(f"rule-set compile failed for {code}: exit status {exc.returncode}") from exc
        finally:
            source_path.unlink(missing_ok=True)
        self.written_count += 1

    def close(self) -> None:
        if self._work_dir is not None:
            self._work_dir.cleanup()
            self._work_dir = None
        logger.info(
            "SRS rule-set sink closed: output_dir={}, written_count={}",
            str(self.output_dir),
            self.written_count,
        )
