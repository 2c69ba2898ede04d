"""Infrastructure adapters for geosite generation."""

from src.geosite.infrastructure.action_output import GitHubActionOutput
from src.geosite.infrastructure.geosite_codec import GeositeProtobufDecoder
from src.geosite.infrastructure.github_client import GitHubReleaseClient

__all__ = ["GeositeProtobufDecoder", "GitHubActionOutput", "GitHubReleaseClient"]
