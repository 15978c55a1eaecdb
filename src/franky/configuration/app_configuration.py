from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict, List
import yaml

from franky.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_SCAM_KEYWORDS: List[str] = [
    "free nitro", "nitro giveaway", "discord nitro", "claim nitro", "nitro reward",
    "claim airdrop", "free airdrop", "airdrop reward", "claim your airdrop",
    "seed phrase", "private key", "mnemonic", "wallet seed", "recover wallet",
    "claim reward", "claim your reward", "free money", "crypto giveaway",
    "click here to claim", "verify your wallet", "connect wallet to claim",
]


class AppConfig:
    """File-lock based accessor around the YAML-based application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed properties with defaults for every setting the bot reads, so a
    missing or partial file still yields a working configuration.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
                if not isinstance(data, dict):
                    return {}
                return data
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
        return {}

    def section(self, name: str) -> Dict[str, Any]:
        """Return a top-level mapping section, or an empty dict when absent or malformed."""
        value = self._data.get(name, {})
        return value if isinstance(value, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        Returns the raw mapping that was loaded (an empty dict on error).
        """
        self._data = self.load_from_disk()
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def bot_name(self) -> str:
        return str(self.section("bot").get("name") or "Franky")

    @property
    def anilist_api_url(self) -> str:
        return str(self.section("anilist").get("api_url") or "https://graphql.anilist.co")

    @property
    def cache_ttl_seconds(self) -> float:
        """Lifetime of cached airing queries. Default is 90 seconds."""
        return float(self.section("anilist").get("cache_ttl_seconds", 90.0))

    @property
    def airing_per_page(self) -> int:
        return int(self.section("airing").get("per_page", 10))

    @property
    def airing_list_limit(self) -> int:
        return int(self.section("airing").get("list_limit", 5))

    @property
    def default_timezone(self) -> str:
        return str(self.section("airing").get("default_timezone") or "UTC")

    @property
    def calendar_per_page(self) -> int:
        return int(self.section("calendar").get("per_page", 50))

    @property
    def calendar_days(self) -> int:
        return int(self.section("calendar").get("days", 7))

    @property
    def recommendation_limit(self) -> int:
        return int(self.section("recommendations").get("limit", 5))

    @property
    def underrated_popularity_threshold(self) -> int:
        """Popularity ceiling used as the "underrated" filter. Default is 50000."""
        return int(self.section("recommendations").get("underrated_popularity_threshold", 50000))

    @property
    def episode_window(self) -> int:
        """Tolerance around an explicit "N episodes" request. Default is 5."""
        return int(self.section("recommendations").get("episode_window", 5))

    @property
    def max_chars(self) -> int:
        """Character budget for formatted airing replies. Default is 900."""
        return int(self.section("formatting").get("max_chars", 900))

    @property
    def trivia_timeout_seconds(self) -> float:
        return float(self.section("trivia").get("timeout_seconds", 60.0))

    @property
    def scam_keywords(self) -> List[str]:
        """Return the configured scam keyword list, falling back to the built-in one."""
        keywords = self.section("moderation").get("scam_keywords")
        if isinstance(keywords, list) and keywords:
            return [str(keyword) for keyword in keywords]
        return list(DEFAULT_SCAM_KEYWORDS)


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
