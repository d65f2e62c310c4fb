import os
import stat
from pathlib import Path

from reka_translate.config.logging import get_logger
from reka_translate.models.errors import ConfigError

logger = get_logger("service.credentials")

SETUP_INSTRUCTIONS = """You can do this by running:
  mkdir -p ~/.config/reka
  echo 'your-api-key-here' > ~/.config/reka/api_key
  chmod 600 ~/.config/reka/api_key"""


def check_permissions(path: Path) -> bool:
    """Warn when the key file mode is broader than owner read/write. Returns True if it is not."""
    if os.name != "posix":
        return True
    mode = stat.S_IMODE(path.stat().st_mode)
    if mode & ~(stat.S_IRUSR | stat.S_IWUSR):
        logger.warning(
            "API key file has insecure permissions (%o). Consider running: chmod 600 %s",
            mode,
            path,
        )
        return False
    return True


def load_api_key(path: Path) -> str:
    """Read the API key, stripping all whitespace."""
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(
            f"API key file not found at {path}\n"
            f"Please create the file and add your Reka API key\n\n{SETUP_INSTRUCTIONS}"
        )

    check_permissions(path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read API key file {path}: {e}") from e

    api_key = "".join(content.split())
    if not api_key:
        raise ConfigError(f"API key file is empty\nPlease add your Reka API key to {path}")
    return api_key
