import argparse
import sys

from src.config import settings
from src.config.logger_config import logger
from src.geosite.release import run_generate, run_release


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m src.geosite")
    parser.add_argument(
        "--input",
        help="Convert a local geosite.dat instead of fetching the latest upstream release.",
    )
    parser.add_argument("--force", action="store_true", help="Regenerate even when the destination is up to date.")
    return parser.parse_args(argv)


# python -m src.geosite
def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        if args.input:
            summary = run_generate(
                args.input,
                output_path=settings.OUTPUT_PATH,
                cn_output_path=settings.CN_OUTPUT_PATH,
                rule_set_output_dir=settings.RULE_SET_OUTPUT_DIR,
                sing_box_path=settings.SING_BOX_PATH,
                show_progress=settings.SHOW_PROGRESS,
            )
            logger.info("Generate finished: {}", summary.to_dict())
            return 0
        result = run_release(
            source_repository=settings.SOURCE_REPOSITORY,
            destination_repository=settings.DESTINATION_REPOSITORY,
            access_token=settings.ACCESS_TOKEN,
            api_url=settings.GITHUB_API_URL,
            force=args.force or settings.NO_SKIP,
            output_path=settings.OUTPUT_PATH,
            cn_output_path=settings.CN_OUTPUT_PATH,
            rule_set_output_dir=settings.RULE_SET_OUTPUT_DIR,
            sing_box_path=settings.SING_BOX_PATH,
            action_output_file=settings.GITHUB_OUTPUT,
            show_progress=settings.SHOW_PROGRESS,
        )
        logger.info(
            "Release finished: skipped={}, reason={}, source_release={}",
            result.skipped,
            result.reason,
            result.source_release,
        )
        return 0
    except Exception:
        logger.exception("Geosite generation failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
