from pathlib import Path

from src.config.logger_config import logger
from src.geosite.application.ports import ActionOutputPort


class GitHubActionOutput(ActionOutputPort):
    def __init__(self, output_file: str | Path | None = None) -> None:
        self.output_file = Path(output_file) if output_file else None

    def set_output(self, name: str, value: str) -> None:
        logger.debug("Action output: name={}, value={}", name, value)
        if self.output_file is None:
            print(f"::set-output name={name}::{value}")
            return
        with self.output_file.open("a", encoding="utf-8") as fp:
            fp.write(f"{name}={value}\n")
