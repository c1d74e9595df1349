import os
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the per-user data folder. MCI_DATA_DIR always wins, then APPDATA on Windows, then the XDG data home.
def _resolve_data_dir() -> Path:
    override = os.getenv("MCI_DATA_DIR")
    if override:
        return Path(override).expanduser()

    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata) / "MouseClickInterval"

    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / "mouse-click-interval"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    settings: Path

    @staticmethod
    def build():
        data = ensure_directory(_resolve_data_dir())
        logs = ensure_directory(data / "logs")

        # Settings file is optional and only ever read, so it isn't created here.
        settings = data / "settings.json"

        return ProjectPaths(
            data = data,
            logs = logs,
            settings = settings
        )
PATHS = ProjectPaths.build()
