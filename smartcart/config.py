import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent.parent
load_dotenv(ROOT_DIR / ".env")


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    ai_provider: str = os.getenv("AI_PROVIDER", "openai")
    semantic_scoring_enabled: bool = _as_bool(os.getenv("SEMANTIC_SCORING_ENABLED", "0"))
    catalog_data_dir: str = os.getenv("CATALOG_DATA_DIR", str(ROOT_DIR / "data"))
    catalog_products_file: str = os.getenv("CATALOG_PRODUCTS_FILE", "catalog_products.json")
    catalog_index_file: str = os.getenv("CATALOG_INDEX_FILE", "catalog_index.json")
    catalog_raw_products_dir: str = os.getenv("CATALOG_RAW_PRODUCTS_DIR", str(ROOT_DIR / "data" / "products"))
    synonyms_file: str = os.getenv("SYNONYMS_FILE", "")
    candidate_limit: int = int(os.getenv("CANDIDATE_LIMIT", "50"))
    match_page_size: int = int(os.getenv("MATCH_PAGE_SIZE", "3"))
    rerank_buffer: int = int(os.getenv("RERANK_BUFFER", "5"))
    request_timeout_seconds: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    debug_log: bool = _as_bool(os.getenv("DEBUG_LOG", "0"))
    gradio_server_name: str = os.getenv("GRADIO_SERVER_NAME", "0.0.0.0")
    gradio_server_port: int = int(os.getenv("GRADIO_SERVER_PORT", "7860"))

    @property
    def catalog_products_path(self) -> Path:
        return Path(self.catalog_data_dir) / self.catalog_products_file

    @property
    def catalog_index_path(self) -> Path:
        return Path(self.catalog_data_dir) / self.catalog_index_file


@dataclass
class MatchingConfig:
    """Runtime switches owned by the admin surface.

    Handed to the matching service and read again on every call, so a change
    applies to the next match without restarting anything.
    """

    semantic_scoring_enabled: bool = False
    ai_provider: str = "openai"

    @classmethod
    def from_settings(cls, source: Settings) -> "MatchingConfig":
        return cls(
            semantic_scoring_enabled=source.semantic_scoring_enabled,
            ai_provider=(source.ai_provider or "openai").strip().lower(),
        )


def configure_logging(debug: bool | None = None) -> None:
    enabled = settings.debug_log if debug is None else debug
    logging.basicConfig(
        level=logging.DEBUG if enabled else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = Settings()
