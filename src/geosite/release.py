import asyncio
from pathlib import Path

import aiohttp

from src.config.logger_config import logger
from src.geosite.application.contracts import PipelineSummary
from src.geosite.application.use_cases.publish_release import (
    PublishReleaseCommand,
    PublishReleaseResult,
    PublishReleaseUseCase,
)
from src.geosite.application.workflows.generate_pipeline import GeositePipeline, PipelineConfig
from src.geosite.domain.subset import CN_SUBSET_CODES
from src.geosite.infrastructure.action_output import GitHubActionOutput
from src.geosite.infrastructure.geosite_codec import GeositeProtobufDecoder
from src.geosite.infrastructure.github_client import DEFAULT_API_URL, GitHubReleaseClient
from src.geosite.infrastructure.sinks.composite_sink import CompositeRuleSetSink
from src.geosite.infrastructure.sinks.geosite_db_sink import GeositeDbSink
from src.geosite.infrastructure.sinks.rule_set_json_sink import JsonRuleSetSink
from src.geosite.infrastructure.sinks.rule_set_srs_sink import SrsRuleSetSink

DEFAULT_SOURCE_REPOSITORY = "Loyalsoldier/v2ray-rules-dat"
DEFAULT_DESTINATION_REPOSITORY = "minoriazure/sing-geosite"


def build_pipeline(
    *,
    output_path: str | Path = "geosite.db",
    cn_output_path: str | Path = "geosite-cn.db",
    rule_set_output_dir: str | Path = "rule-set",
    sing_box_path: str = "sing-box",
) -> GeositePipeline:
    rule_set_sink = CompositeRuleSetSink(
        primary=SrsRuleSetSink(rule_set_output_dir, sing_box_path=sing_box_path),
        secondary=JsonRuleSetSink(rule_set_output_dir),
    )
    return GeositePipeline(
        decoder=GeositeProtobufDecoder(),
        database_sink=GeositeDbSink(output_path),
        subset_database_sink=GeositeDbSink(cn_output_path),
        rule_set_sink=rule_set_sink,
    )


def run_generate(
    input_path: str | Path,
    *,
    output_path: str | Path = "geosite.db",
    cn_output_path: str | Path = "geosite-cn.db",
    rule_set_output_dir: str | Path = "rule-set",
    sing_box_path: str = "sing-box",
    show_progress: bool = True,
) -> PipelineSummary:
    """Run the pipeline on a local geosite.dat, without any network access."""
    data = Path(input_path).read_bytes()
    pipeline = build_pipeline(
        output_path=output_path,
        cn_output_path=cn_output_path,
        rule_set_output_dir=rule_set_output_dir,
        sing_box_path=sing_box_path,
    )
    return pipeline.run(data, PipelineConfig(subset_codes=CN_SUBSET_CODES, show_progress=show_progress))


async def run_release_async(
    *,
    source_repository: str = DEFAULT_SOURCE_REPOSITORY,
    destination_repository: str = DEFAULT_DESTINATION_REPOSITORY,
    access_token: str | None = None,
    api_url: str = DEFAULT_API_URL,
    force: bool = False,
    output_path: str | Path = "geosite.db",
    cn_output_path: str | Path = "geosite-cn.db",
    rule_set_output_dir: str | Path = "rule-set",
    sing_box_path: str = "sing-box",
    action_output_file: str | Path | None = None,
    show_progress: bool = True,
) -> PublishReleaseResult:
    use_case = PublishReleaseUseCase(
        release_source=GitHubReleaseClient(access_token=access_token, api_url=api_url),
        pipeline=build_pipeline(
            output_path=output_path,
            cn_output_path=cn_output_path,
            rule_set_output_dir=rule_set_output_dir,
            sing_box_path=sing_box_path,
        ),
        action_output=GitHubActionOutput(action_output_file),
    )
    command = PublishReleaseCommand(
        source_repository=source_repository,
        destination_repository=destination_repository,
        force=force,
        pipeline_config=PipelineConfig(subset_codes=CN_SUBSET_CODES, show_progress=show_progress),
    )
    logger.info(
        "Release started: source_repository={}, destination_repository={}, force={}, authenticated={}",
        source_repository,
        destination_repository,
        force,
        access_token is not None,
    )
    async with aiohttp.ClientSession() as session:
        return await use_case.execute(session, command)


def run_release(**kwargs) -> PublishReleaseResult:
    return asyncio.run(run_release_async(**kwargs))
