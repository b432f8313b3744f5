from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Datebook"
APP_AUTHOR = "Datebook"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
