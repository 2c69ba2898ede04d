# 發布流程的設定，全部可由環境變數或 .env 覆寫

import os

from dotenv import load_dotenv

load_dotenv()

# Optional GitHub token; sent as a bearer Authorization header when present.
ACCESS_TOKEN = os.getenv("ACCESS_TOKEN") or None
# "true" forces regeneration even when the destination release is current.
NO_SKIP = os.getenv("NO_SKIP") == "true"

GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
# Set by the GitHub Actions runner.
GITHUB_OUTPUT = os.getenv("GITHUB_OUTPUT") or None

SOURCE_REPOSITORY = os.getenv("SOURCE_REPOSITORY", "Loyalsoldier/v2ray-rules-dat")
DESTINATION_REPOSITORY = os.getenv("DESTINATION_REPOSITORY", "minoriazure/sing-geosite")

OUTPUT_PATH = os.getenv("OUTPUT_PATH", "geosite.db")
CN_OUTPUT_PATH = os.getenv("CN_OUTPUT_PATH", "geosite-cn.db")
RULE_SET_OUTPUT_DIR = os.getenv("RULE_SET_OUTPUT_DIR", "rule-set")

SING_BOX_PATH = os.getenv("SING_BOX_PATH", "sing-box")
SHOW_PROGRESS = os.getenv("SHOW_PROGRESS", "true").lower() != "false"
