"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use RAYONIX_ prefix (e.g., RAYONIX_INLINE_IMPORTS=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use RAYONIX_ prefix.

    Examples:
        RAYONIX_ENCODING=latin-1
        RAYONIX_INLINE_IMPORTS=true
        RAYONIX_HTTP_TIMEOUT=10
    """

    model_config = SettingsConfigDict(
        env_prefix="RAYONIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Directive grammar
    trigger_token: str = Field(
        default="'!rayonix",
        description="Comment marker plus keyword that opens a directive line",
    )

    import_keyword: str = Field(
        default="import",
        description="Command keyword for local file inclusion",
    )

    meta_keyword: str = Field(
        default="meta",
        description="Command keyword for remote (HTTP) inclusion",
    )

    # Assembly configuration
    inline_imports: bool = Field(
        default=False,
        description="Substitute resolved content at the directive line instead of appending it after the document",
    )

    detect_cycles: bool = Field(
        default=True,
        description="Abort when an import chain revisits a file that is still being expanded",
    )

    # I/O configuration
    encoding: str = Field(
        default="utf-8",
        description="Text encoding for source files, fetched content and output",
    )

    output_newline: str = Field(
        default="\n",
        description="Terminator written after every output line",
    )

    # Network configuration
    http_timeout: Optional[float] = Field(
        default=None,
        description="Timeout in seconds for meta fetches (None leaves the socket default)",
    )

    user_agent: Optional[str] = Field(
        default=None,
        description="User-Agent header sent with meta fetches",
    )

    def argumentOffset_get(self, keyword: str) -> int:
        """
        Character offset at which a directive's argument begins.

        The argument starts after the trigger, one space, the keyword
        and one more space.

        Example:
            >>> AppSettings().argumentOffset_get("import")
            17
        """
        return len(self.trigger_token) + 1 + len(keyword) + 1


# Singleton instance - import this in your code
appsettings = AppSettings()
