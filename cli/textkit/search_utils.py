import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SEARCH_LIMIT = 5
DEFAULT_LSA_RANK = 2
SCORE_PRECISION = 4

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CACHE_DIR = Path(os.getenv("TEXTKIT_CACHE_DIR", PROJECT_ROOT / "cache"))
DATA_PATH = Path(os.getenv("TEXTKIT_DATA_PATH", DATA_DIR / "documents.json"))
STOPWORDS_PATH = Path(os.getenv("TEXTKIT_STOPWORDS_PATH", DATA_DIR / "stopwords.txt"))
LEXICON_PATH = Path(os.getenv("TEXTKIT_LEXICON_PATH", DATA_DIR / "lexicon.json"))
LOG_LEVEL = os.getenv("TEXTKIT_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def load_documents(path: Path = DATA_PATH) -> list[dict]:
    with open(path, "r") as f:
        data = json.load(f)
    return data["documents"]

