from dataclasses import dataclass
import os
from pathlib import Path
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(filename=".env", usecwd=True))


@dataclass(frozen=True)
class Settings:
    output_dir: str
    archive_name: str
    archive_folder: str
    region_window: int
    render_width: int
    log_level: str

def load_settings() -> Settings:
    invalid = []
    def number(k, default):
        raw = os.getenv(k, str(default))
        try:
            v = int(raw)
        except ValueError:
            invalid.append(k)
            return default
        if v <= 0:
            invalid.append(k)
            return default
        return v
    s = Settings(
        output_dir = os.getenv("SHORTLIST_OUTPUT_DIR", "./out"),
        archive_name = os.getenv("SHORTLIST_ARCHIVE_NAME", "UNCTAD_Selection.zip"),
        archive_folder = os.getenv("SHORTLIST_ARCHIVE_FOLDER", "Selected_Candidates"),
        region_window = number("SHORTLIST_REGION_WINDOW", 1500),
        render_width = number("SHORTLIST_RENDER_WIDTH", 900),
        log_level = os.getenv("SHORTLIST_LOG_LEVEL", "INFO").upper(),
    )
    if invalid:
        raise RuntimeError(f"Invalid numeric env vars: {', '.join(invalid)}")
    Path(s.output_dir).mkdir(parents=True, exist_ok=True)
    return s
