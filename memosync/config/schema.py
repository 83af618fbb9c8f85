"""Configuration schema using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

API_VERSION_SEGMENT = "/api/v1"


class SyncConfig(BaseModel):
    """Memos server connection and sync behaviour."""
    memos_api_url: str = ""  # e.g. "https://memos.example.com/api/v1"
    memos_access_token: str = ""
    sync_directory: str = "memos"  # Vault-relative root of the mirror tree
    sync_frequency: Literal["manual", "auto"] = "manual"
    auto_sync_interval: int = Field(default=30, gt=0, description="Minutes between automatic syncs")
    sync_limit: int = Field(default=1000, gt=0, description="Maximum memos fetched per sync")

    @field_validator("memos_api_url")
    @classmethod
    def _append_api_version(cls, value: str) -> str:
        url = value.strip()
        if url and not url.endswith(API_VERSION_SEGMENT):
            url = url.rstrip("/") + API_VERSION_SEGMENT
        return url

    @property
    def server_url(self) -> str:
        """Base URL without the API version segment (used for file downloads)."""
        return self.memos_api_url.replace(API_VERSION_SEGMENT, "", 1)


class VaultConfig(BaseModel):
    """Local vault that receives the mirror tree."""
    path: str = "~/.memosync/vault"


class AIConfig(BaseModel):
    """Optional language-model augmentation."""
    model_config = ConfigDict(protected_namespaces=())

    model_type: Literal["openai", "gemini", "claude", "ollama"] = "gemini"
    api_key: str = ""
    model_name: str = "gemini-1.5-flash"
    language: str = "English"  # Target language for summaries


class Config(BaseSettings):
    """Root configuration for memosync."""
    model_config = SettingsConfigDict(env_prefix="MEMOSYNC_", env_nested_delimiter="__")

    sync: SyncConfig = Field(default_factory=SyncConfig)
    vault: VaultConfig = Field(default_factory=VaultConfig)
    ai: AIConfig = Field(default_factory=AIConfig)

    @property
    def vault_path(self) -> Path:
        """Get expanded vault path."""
        return Path(self.vault.path).expanduser()
