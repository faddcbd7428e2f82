import os
import sys
import logging
import dataclasses
from dataclasses import dataclass

APP_NAME = "MojangAuthChecker"
APP_TITLE = "Mojang Auth Checker"

if sys.platform == "win32":
    HOSTS_PATH = r"C:\Windows\System32\drivers\etc\hosts"
else:
    HOSTS_PATH = "/etc/hosts"

TARGET_DOMAIN = "mojang.com"

# Single argument that switches the program to headless clean mode
CLEAN_DIRECTIVE = "clean"

LOG_CONFIG = {
    "level": "INFO",
    "max_bytes": 1024 * 1024,
    "backup_count": 3,
}


@dataclass(frozen=True)
class Settings:
    hosts_path: str = HOSTS_PATH
    target: str = TARGET_DOMAIN
    newline: str = os.linesep
    clean_directive: str = CLEAN_DIRECTIVE
    title: str = APP_TITLE
    log_level_name: str = LOG_CONFIG["level"]
    log_max_bytes: int = LOG_CONFIG["max_bytes"]
    log_backup_count: int = LOG_CONFIG["backup_count"]

    @property
    def log_level(self) -> int:
        return getattr(logging, self.log_level_name.upper(), logging.INFO)

    def replace(self, **changes) -> "Settings":
        """Returns a copy of these settings with the given fields changed."""
        return dataclasses.replace(self, **changes)
