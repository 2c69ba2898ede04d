from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter

from tqdm import tqdm

from src.config.logger_config import logger
from src.geosite.application.contracts import PipelineSummary
from src.geosite.application.ports import DatabaseSinkPort, GeositeDecoderPort, RuleSetSinkPort
from src.geosite.domain.category_map import build_category_map
from src.geosite.domain.compiler import compile_rule_items
from src.geosite.domain.subset import CN_SUBSET_CODES, select_subset


@dataclass(frozen=True)
class PipelineConfig:
    subset_codes: tuple[str, ...] = CN_SUBSET_CODES
    show_progress: bool = True


class GeositePipeline:
    """Runs decode -> category map -> databases -> per-category rule-sets.

    Sequential and fail-fast: the first writer exception stops the run and
    propagates. Artifacts written before the failure are left in place.
    """

    def __init__(
        self,
        decoder: GeositeDecoderPort,
        database_sink: DatabaseSinkPort,
        subset_database_sink: DatabaseSinkPort,
        rule_set_sink: RuleSetSinkPort,
    ) -> None:
        self.decoder = decoder
        self.database_sink = database_sink
        self.subset_database_sink = subset_database_sink
        self.rule_set_sink = rule_set_sink

    def run(self, data: bytes, config: PipelineConfig | None = None) -> PipelineSummary:
        config = config or PipelineConfig()
        started = perf_counter()

        records = self.decoder.decode(data)
        logger.info("Geosite pipeline started: input_bytes={}, record_count={}", len(data), len(records))

        category_map = build_category_map(records)
        categories = category_map.categories
        self.database_sink.write(categories)

        subset = select_subset(categories, config.subset_codes)
        missing = [code for code in config.subset_codes if code not in categories]
        if missing:
            logger.warning("Subset codes missing from category map, written empty: codes={}", missing)
        self.subset_database_sink.write(subset)

        rule_set_count = 0
        self.rule_set_sink.prepare()
        try:
            for code, items in tqdm(
                categories.items(),
                total=len(categories),
                desc="Rule-sets",
                unit="category",
                leave=True,
                disable=not config.show_progress,
            ):
                buckets = compile_rule_items(items)
                if buckets.is_empty():
                    logger.warning("Category compiled to an empty rule-set: code={}", code)
                self.rule_set_sink.write_rule_set(code, buckets)
                rule_set_count += 1
        finally:
            self.rule_set_sink.close()

        summary = PipelineSummary(
            record_count=category_map.record_count,
            category_count=len(categories),
            attribute_category_count=category_map.attribute_category_count,
            dropped_count=category_map.dropped_count,
            collision_count=len(category_map.collision_codes),
            subset_codes=tuple(config.subset_codes),
            rule_set_count=rule_set_count,
            duration_ms=int((perf_counter() - started) * 1000),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Geosite pipeline completed: record_count={}, category_count={}, attribute_category_count={}, rule_set_count={}, dropped_count={}, collision_count={}, duration_ms={}",
            summary.record_count,
            summary.category_count,
            summary.attribute_category_count,
            summary.rule_set_count,
            summary.dropped_count,
            summary.collision_count,
            summary.duration_ms,
        )
        return summary
