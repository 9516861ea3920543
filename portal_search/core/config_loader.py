"""
Configuration loader for Portal Search.

Loads settings from config.json and provides typed access via dataclasses.
Keeps a cached instance for scripts and supports runtime reload.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    documents_root: Path
    manifest_path: Path
    logs_directory: Path


@dataclass
class ExtractionConfig:
    """Configuration for PDF extraction settings."""
    primary_backend: str
    fallback_backend: str
    max_pages: int
    supported_extensions: List[str]
    request_timeout_seconds: float


@dataclass
class IndexingConfig:
    """Configuration for ingestion behavior."""
    max_workers: int
    document_timeout_seconds: float
    max_documents: int


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    max_results: int
    snippet_window: int
    min_token_length: int


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Scripts obtain the cached instance via get_config(); library code
    receives a Config explicitly.
    """
    paths: PathsConfig
    extraction: ExtractionConfig
    indexing: IndexingConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def defaults(cls, project_root: Path = None) -> "Config":
        """Build a Config with every section at its default value."""
        return cls._parse_config({}, Path(project_root) if project_root else Path.cwd())

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            documents_root=cls._resolve_path(paths_data.get("documents_root", "public"), project_root),
            manifest_path=cls._resolve_path(paths_data.get("manifest_path", "config/manifest.json"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            primary_backend=ext_data.get("primary_backend", "pypdf"),
            fallback_backend=ext_data.get("fallback_backend", "pdfplumber"),
            max_pages=ext_data.get("max_pages", 5),
            supported_extensions=[
                ext.lower() for ext in ext_data.get("supported_extensions", [".pdf"])
            ],
            request_timeout_seconds=ext_data.get("request_timeout_seconds", 30)
        )

        idx_data = data.get("indexing", {})
        indexing = IndexingConfig(
            max_workers=idx_data.get("max_workers", 4),
            document_timeout_seconds=idx_data.get("document_timeout_seconds", 60),
            max_documents=idx_data.get("max_documents", 0)
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            max_results=search_data.get("max_results", 2),
            snippet_window=search_data.get("snippet_window", 500),
            min_token_length=search_data.get("min_token_length", 3)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        if extraction.max_pages < 1:
            raise ConfigurationError(
                "extraction.max_pages must be at least 1",
                {"max_pages": extraction.max_pages}
            )

        if indexing.max_workers < 1:
            raise ConfigurationError(
                "indexing.max_workers must be at least 1",
                {"max_workers": indexing.max_workers}
            )

        if search.max_results < 1:
            raise ConfigurationError(
                "search.max_results must be at least 1",
                {"max_results": search.max_results}
            )

        return cls(
            paths=paths,
            extraction=extraction,
            indexing=indexing,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the cached Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The cached Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
