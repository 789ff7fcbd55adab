"""
Settings/secret loading helpers.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Secrets(BaseModel):
    """
    Container for credentials loaded from environment variables.

    Attributes:
        submit_token: Bearer token sent with HTTP submissions.
    """
    submit_token: Optional[str] = Field(default=None, alias="AVALANCHE_SUBMIT_TOKEN")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_secrets() -> Secrets:
    """
    Load secrets from environment/.env exactly once.
    """
    values = {field.alias: os.getenv(field.alias) for field in Secrets.model_fields.values()}
    return Secrets(**values)
