from dataclasses import dataclass, field

import aiohttp

from src.config.logger_config import logger
from src.geosite.application.contracts import PipelineSummary, ReleaseAsset, ReleaseInfo
from src.geosite.application.errors import ReleaseFetchError
from src.geosite.application.ports import ActionOutputPort, ReleaseSourcePort
from src.geosite.application.workflows.generate_pipeline import GeositePipeline, PipelineConfig
from src.geosite.domain.checksum import verify_checksum
from src.geosite.domain.release_policy import evaluate_release_decision

GEOSITE_ASSET_NAME = "geosite.dat"
GEOSITE_CHECKSUM_ASSET_NAME = "geosite.dat.sha256sum"


@dataclass(frozen=True)
class PublishReleaseCommand:
    source_repository: str
    destination_repository: str
    force: bool = False
    pipeline_config: PipelineConfig = field(default_factory=PipelineConfig)


@dataclass(frozen=True)
class PublishReleaseResult:
    skipped: bool
    reason: str
    source_release: str
    summary: PipelineSummary | None = None


class PublishReleaseUseCase:
    def __init__(
        self,
        release_source: ReleaseSourcePort,
        pipeline: GeositePipeline,
        action_output: ActionOutputPort,
    ) -> None:
        self.release_source = release_source
        self.pipeline = pipeline
        self.action_output = action_output

    async def execute(self, session: aiohttp.ClientSession, command: PublishReleaseCommand) -> PublishReleaseResult:
        source = await self.release_source.fetch_latest_release(session, command.source_repository)
        destination_name: str | None = None
        try:
            destination = await self.release_source.fetch_latest_release(session, command.destination_repository)
            destination_name = destination.name
        except ReleaseFetchError as exc:
            logger.warning("Missing destination latest release: repository={}, error={}", command.destination_repository, exc)

        decision = evaluate_release_decision(source.name, destination_name, force=command.force)
        logger.info(
            "Release decision: should_generate={}, reason={}, source_release={}, destination_release={}",
            decision.should_generate,
            decision.reason,
            source.name,
            destination_name,
        )
        if not decision.should_generate:
            logger.info("Already latest: source_release={}", source.name)
            self.action_output.set_output("skip", "true")
            return PublishReleaseResult(skipped=True, reason=decision.reason, source_release=source.name)

        data = await self._download_geosite(session, source)
        summary = self.pipeline.run(data, command.pipeline_config)
        self.action_output.set_output("tag", source.name)
        return PublishReleaseResult(
            skipped=False,
            reason=decision.reason,
            source_release=source.name,
            summary=summary,
        )

    async def _download_geosite(self, session: aiohttp.ClientSession, release: ReleaseInfo) -> bytes:
        geosite_asset = self._require_asset(release, GEOSITE_ASSET_NAME)
        checksum_asset = self._require_asset(release, GEOSITE_CHECKSUM_ASSET_NAME)
        data = await self.release_source.download(session, geosite_asset.download_url)
        remote_checksum = await self.release_source.download(session, checksum_asset.download_url)
        digest = verify_checksum(data, remote_checksum)
        logger.info("Checksum verified: asset={}, sha256={}, size={}", geosite_asset.name, digest, len(data))
        return data

    @staticmethod
    def _require_asset(release: ReleaseInfo, name: str) -> ReleaseAsset:
        asset = release.find_asset(name)
        if asset is None:
            raise ReleaseFetchError(f"{name} asset not found in upstream release {release.name}")
        return asset
