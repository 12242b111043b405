#!/usr/bin/env python3

#
# Copyright (C) 2024-2025 biomodal. All rights reserved.
#

import logging
import os
from dataclasses import dataclass
from typing import Optional

# Configure logging for Cloud Functions
logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

AUTH_LEVELS = ("anonymous", "authenticated")

STORAGE_FINALIZED_EVENT = "google.cloud.storage.object.v1.finalized"


@dataclass(frozen=True)
class FunctionBinding:
    """Trigger, output and host settings of one deployed function."""
    name: str
    entry_point: str
    event_source: Optional[str] = None
    output_target: Optional[str] = None
    methods: tuple = ()
    auth_level: str = "anonymous"
    retry: bool = False
    max_instances: int = 100

    @property
    def is_http(self) -> bool:
        return self.event_source is None


def _env_bool(environ, key: str, default: bool) -> bool:
    value = environ.get(key)
    if value is None or value == "":
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {key}: '{value}'")


def _env_positive_int(environ, key: str, default: int) -> int:
    value = environ.get(key)
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"Invalid integer for {key}: '{value}'")
    if number <= 0:
        raise ValueError(f"{key} must be positive, got {number}")
    return number


def load_bindings(environ=None) -> dict:
    """
    Build the function bindings from environment settings.

    Args:
        environ (Mapping): Settings to read, defaults to os.environ.

    Returns:
        dict: Bindings keyed by "blob_copy" and "function_introduction".

    Raises:
        ValueError: If a setting is invalid or source and destination are the same bucket.
    """
    if environ is None:
        environ = os.environ

    source_bucket = environ.get('SOURCE_BUCKET') or 'source-container'
    destination_bucket = environ.get('DESTINATION_BUCKET') or 'destination-container'
    if source_bucket == destination_bucket:
        logger.error(f"Source and destination bucket are both '{source_bucket}'.")
        raise ValueError(f"Copying '{source_bucket}' onto itself would re-trigger the copy for every object.")

    auth_level = (environ.get('GREETING_AUTH_LEVEL') or 'anonymous').lower()
    if auth_level not in AUTH_LEVELS:
        raise ValueError(f"Invalid GREETING_AUTH_LEVEL '{auth_level}', expected one of {AUTH_LEVELS}")

    blob_copy = FunctionBinding(
        name=environ.get('BLOB_COPY_FUNCTION_NAME') or 'blob-copy-function',
        entry_point="blob_copy_function",
        event_source=source_bucket,
        output_target=destination_bucket,
        retry=_env_bool(environ, 'BLOB_COPY_RETRY', True),
        max_instances=_env_positive_int(environ, 'BLOB_COPY_MAX_INSTANCES', 100),
    )
    function_introduction = FunctionBinding(
        name=environ.get('GREETING_FUNCTION_NAME') or 'function-introduction',
        entry_point="function_introduction",
        methods=("GET", "POST"),
        auth_level=auth_level,
        max_instances=_env_positive_int(environ, 'GREETING_MAX_INSTANCES', 100),
    )
    return {
        "blob_copy": blob_copy,
        "function_introduction": function_introduction,
    }


# Connection setting shared by the source and destination buckets
STORAGE_PROJECT = os.environ.get('STORAGE_PROJECT') or None

# Load configuration at startup
BINDINGS = load_bindings()
BLOB_COPY = BINDINGS["blob_copy"]
FUNCTION_INTRODUCTION = BINDINGS["function_introduction"]
