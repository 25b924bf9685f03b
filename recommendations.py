import json
from pathlib import Path
from typing import List

from loguru import logger
from sqlalchemy.orm import Session

from config import JOBS_PATH, MENTOR_ROLE
from store import AccountStore


def load_jobs(path: Path = JOBS_PATH) -> List[dict]:
    """Load job postings from disk. Missing or malformed files give an empty list."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
            if isinstance(data, list):
                return [job for job in data if isinstance(job, dict)]
    except FileNotFoundError:
        logger.warning("Job postings file not found: {}", path)
        return []
    except json.JSONDecodeError:
        logger.warning("Job postings file is not valid JSON: {}", path)
        return []
    return []


def list_mentors(db: Session) -> List[dict]:
    """Public profiles of every account registered with the mentor role."""
    return AccountStore(db).list_by_role(MENTOR_ROLE)
