"""
Configuration for QuickNote.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Note storage configuration."""

    backend: str = "sqlite"
    db_path: str = "data/notes.db"


class NotesConfig(BaseModel):
    """Note creation defaults."""

    # Placeholder identifier stamped on every note; not a real per-device id
    device_id: str = "local-device"
    title_format: str = "%Y-%m-%d %H:%M:%S"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            QUICKNOTE_STORAGE_BACKEND: Storage backend (sqlite)
            QUICKNOTE_DB_PATH: Path to the SQLite database file
            QUICKNOTE_DEVICE_ID: Device identifier stamped on new notes
            QUICKNOTE_TITLE_FORMAT: strftime format for note titles
            QUICKNOTE_LOG_LEVEL: Log level
            QUICKNOTE_LOG_TO_FILE: Write JSON logs to files
            QUICKNOTE_LOG_DIR: Directory for log files
            QUICKNOTE_HOST: HTTP bind host
            QUICKNOTE_PORT: HTTP bind port
            QUICKNOTE_RELOAD: Enable auto-reload (development)
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None or value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            storage=StorageConfig(
                backend=get_env("QUICKNOTE_STORAGE_BACKEND", "sqlite"),
                db_path=get_env("QUICKNOTE_DB_PATH", "data/notes.db"),
            ),
            notes=NotesConfig(
                device_id=get_env("QUICKNOTE_DEVICE_ID", "local-device"),
                title_format=get_env("QUICKNOTE_TITLE_FORMAT", "%Y-%m-%d %H:%M:%S"),
            ),
            logging=LoggingConfig(
                level=get_env("QUICKNOTE_LOG_LEVEL", "INFO"),
                log_to_file=get_env("QUICKNOTE_LOG_TO_FILE", True),
                log_dir=get_env("QUICKNOTE_LOG_DIR", "logs"),
                file_rotation=get_env("QUICKNOTE_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("QUICKNOTE_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("QUICKNOTE_LOG_COMPRESSION", "zip"),
                serialize=get_env("QUICKNOTE_LOG_SERIALIZE", True),
            ),
            server=ServerConfig(
                host=get_env("QUICKNOTE_HOST", "127.0.0.1"),
                port=get_env("QUICKNOTE_PORT", 8000),
                reload=get_env("QUICKNOTE_RELOAD", False),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(**(data or {}))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        final_dict = {**config_dict}

        # Env values that differ from defaults win over YAML
        default = cls()
        if env_config.storage != default.storage:
            final_dict["storage"] = env_config.storage.model_dump()
        if env_config.notes != default.notes:
            final_dict["notes"] = env_config.notes.model_dump()
        if env_config.logging != default.logging:
            final_dict["logging"] = env_config.logging.model_dump()
        if env_config.server != default.server:
            final_dict["server"] = env_config.server.model_dump()

        return cls(**final_dict) if final_dict else env_config
