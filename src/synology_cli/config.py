"""Configuration management for Synology CLI.

This module handles loading, saving, and managing CLI configuration including
profiles for multiple DiskStations. Configuration is stored in a JSON file
with secure file permissions, since profiles hold account passwords.
"""

import ipaddress
import json
import os
import stat
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator
from rich.console import Console

from synology_cli.client.base import format_origin
from synology_cli.client.exceptions import ConfigurationError

console = Console()


class ProfileConfig(BaseModel):
    """Configuration for a single DiskStation profile.

    Attributes:
        host: Hostname or IP address of the device
        port: DSM HTTP port
        account: Account used to log in
        password: Password for the account
        timeout: Request timeout in seconds
    """

    host: str = Field(..., min_length=1, description="DiskStation hostname or IP")
    port: int = Field(5000, ge=1, le=65535, description="DSM HTTP port")
    account: str = Field(..., min_length=1, description="Login account")
    password: str = Field(..., description="Login password")
    timeout: int = Field(30, ge=1, le=300, description="Request timeout in seconds")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Ensure host is a bare hostname or IP address, not a URL.

        IPv6 literals are accepted with or without brackets and stored bare.
        """
        v = v.strip().rstrip("/")
        if "://" in v:
            raise ValueError("Host must not include a scheme (use nas.local, not http://nas.local)")
        if "/" in v:
            raise ValueError("Host must not include a port or path (use --port for the port)")
        if ":" in v:
            try:
                return str(ipaddress.IPv6Address(v.strip("[]")))
            except ValueError:
                raise ValueError(
                    "Host must not include a port or path (use --port for the port)"
                ) from None
        return v

    @property
    def origin(self) -> str:
        return format_origin(self.host, self.port)


class Config(BaseModel):
    """Main configuration container.

    Attributes:
        active_profile: Name of the currently active profile
        profiles: Dictionary mapping profile names to their configurations
    """

    active_profile: str = Field("default", description="Active profile name")
    profiles: Dict[str, ProfileConfig] = Field(
        default_factory=dict, description="Profile configurations"
    )

    def get_active_profile(self) -> ProfileConfig:
        """Get the active profile configuration.

        Returns:
            The active profile configuration

        Raises:
            ConfigurationError: If active profile doesn't exist
        """
        return self.get_profile(self.active_profile)

    def get_profile(self, name: str) -> ProfileConfig:
        """Get a specific profile by name.

        Args:
            name: Profile name

        Returns:
            The profile configuration

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        if name not in self.profiles:
            raise ConfigurationError(
                f"Profile '{name}' not found. "
                f"Available profiles: {', '.join(self.profiles.keys()) or 'none'}"
            )
        return self.profiles[name]


class ConfigManager:
    """Manages configuration file operations.

    This class handles reading, writing, and securing the configuration file.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Custom configuration directory. If None, uses
                       $SYNOLOGY_CONFIG_DIR or ~/.synology-cli
        """
        if config_dir is None:
            env_dir = os.getenv("SYNOLOGY_CONFIG_DIR")
            if env_dir:
                config_dir = Path(env_dir)
            else:
                config_dir = Path.home() / ".synology-cli"

        self.config_dir = config_dir
        self.config_file = self.config_dir / "config.json"

    def ensure_config_dir(self) -> None:
        """Create configuration directory with 700 permissions."""
        if not self.config_dir.exists():
            self.config_dir.mkdir(mode=0o700, parents=True)
        else:
            self.config_dir.chmod(0o700)

    def check_config_permissions(self) -> None:
        """Check and fix configuration file permissions.

        Configuration file should be 600 (rw-------) to protect passwords.
        """
        if not self.config_file.exists():
            return

        current_mode = stat.S_IMODE(os.stat(self.config_file).st_mode)
        expected_mode = 0o600

        if current_mode != expected_mode:
            console.print(
                f"[yellow]Warning:[/yellow] Config file has unsafe permissions "
                f"({oct(current_mode)}). Setting to {oct(expected_mode)}..."
            )
            try:
                self.config_file.chmod(expected_mode)
            except OSError as e:
                console.print(
                    f"[red]Error:[/red] Could not fix permissions: {e}\n"
                    f"Please manually set permissions: chmod 600 {self.config_file}"
                )

    def load(self) -> Config:
        """Load configuration from file.

        Returns:
            Configuration object

        Raises:
            ConfigurationError: If configuration file is invalid or cannot be read
        """
        if not self.config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_file}\n"
                "Run 'synology-cli config init' to create initial configuration"
            )

        self.check_config_permissions()

        try:
            with open(self.config_file, "r") as f:
                data = json.load(f)
            return Config.model_validate(data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")

    def save(self, config: Config) -> None:
        """Save configuration to file atomically.

        Args:
            config: Configuration object to save

        Raises:
            ConfigurationError: If configuration cannot be saved
        """
        self.ensure_config_dir()

        try:
            temp_file = self.config_file.with_suffix(".tmp")
            with open(temp_file, "w") as f:
                f.write(config.model_dump_json(indent=2))

            temp_file.chmod(0o600)
            temp_file.replace(self.config_file)

        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

    def exists(self) -> bool:
        return self.config_file.exists()

    def add_profile(
        self,
        config: Config,
        name: str,
        host: str,
        account: str,
        password: str,
        port: int = 5000,
        timeout: int = 30,
        set_active: bool = False,
    ) -> Config:
        """Add or update a profile in configuration.

        Args:
            config: Current configuration
            name: Profile name
            host: DiskStation hostname or IP
            account: Login account
            password: Login password
            port: DSM HTTP port
            timeout: Request timeout in seconds
            set_active: Whether to set this profile as active

        Returns:
            Updated configuration object
        """
        is_first = not config.profiles

        config.profiles[name] = ProfileConfig(
            host=host,
            port=port,
            account=account,
            password=password,
            timeout=timeout,
        )

        if set_active or is_first:
            config.active_profile = name

        return config

    def get_profile_or_active(
        self,
        profile_name: Optional[str] = None,
    ) -> tuple[Config, ProfileConfig, str]:
        """Get a specific profile or the active profile.

        Args:
            profile_name: Specific profile name, or None for active profile

        Returns:
            Tuple of (config, profile, profile_name)

        Raises:
            ConfigurationError: If profile doesn't exist or no configuration
        """
        config = self.load()

        if profile_name:
            return config, config.get_profile(profile_name), profile_name

        return config, config.get_active_profile(), config.active_profile
