#!/usr/bin/env python3

#
# Copyright (C) 2024-2025 biomodal. All rights reserved.
#

import logging
import sys
from typing import Optional

import functions_framework
from google.cloud import storage

from function_settings import BLOB_COPY, STORAGE_PROJECT

logger = logging.getLogger(__name__)


def copy_blob(source_bucket: storage.Bucket, destination_bucket: storage.Bucket, name: str,
              generation=None, log: logging.Logger = logger) -> Optional[int]:
    """
    Copy one blob to the same name in another bucket.

    The bytes are copied by the storage service, never through this process.
    When a pinned generation is gone but a newer one exists, the blob was
    overwritten before the copy ran and the newer finalize event will copy it,
    so nothing is copied here.

    Args:
        source_bucket (storage.Bucket): Bucket holding the new blob.
        destination_bucket (storage.Bucket): Bucket to write the copy to.
        name (str): Blob name, used for both source and destination.
        generation (int): Source generation to copy, latest if None.
        log (logging.Logger): Logger receiving the copy record.

    Returns:
        int: Number of bytes copied, None if the generation was superseded
    """
    source_blob = source_bucket.get_blob(name, generation=generation)
    if source_blob is None:
        current_blob = source_bucket.get_blob(name) if generation is not None else None
        if current_blob is not None:
            log.warning(f"Skipping blob '{name}' generation {generation}, superseded by generation {current_blob.generation}")
            return None
        log.error(f"Blob '{name}' not found in bucket '{source_bucket.name}'.")
        raise FileNotFoundError(f"Blob '{name}' (generation {generation}) not found in bucket '{source_bucket.name}'.")

    log.info(f"Copying blob: {name}, Size: {source_blob.size} Bytes")
    source_bucket.copy_blob(source_blob, destination_bucket, name, source_generation=generation)
    return source_blob.size


@functions_framework.cloud_event
def blob_copy_function(cloud_event):
    """
    Cloud Function entry point for copying new blobs.

    Args:
        cloud_event: Storage object finalized event

    Returns:
        int: Number of bytes copied, None if the event was skipped
    """
    data = cloud_event.data or {}
    name = data.get("name")
    if not name:
        logger.error(f"Event {cloud_event['id']} carries no blob name.")
        raise ValueError(f"Event {cloud_event['id']} carries no blob name")

    bucket_name = data.get("bucket")
    if bucket_name != BLOB_COPY.event_source:
        logger.warning(f"Skipping blob '{name}' from bucket '{bucket_name}', expected '{BLOB_COPY.event_source}'")
        return None

    generation = data.get("generation")
    if generation is not None:
        generation = int(generation)

    client = storage.Client(project=STORAGE_PROJECT)
    return copy_blob(
        client.bucket(BLOB_COPY.event_source),
        client.bucket(BLOB_COPY.output_target),
        name,
        generation=generation,
    )


def copy_named_blobs(names) -> None:
    """
    Copy the given blobs from the source to the destination bucket.
    (Manual run outside the functions runtime)
    """
    client = storage.Client(project=STORAGE_PROJECT)
    source_bucket = client.bucket(BLOB_COPY.event_source)
    destination_bucket = client.bucket(BLOB_COPY.output_target)
    for name in names:
        copy_blob(source_bucket, destination_bucket, name)
    logger.info(f"Done copying {len(names)} blobs!")


if __name__ == "__main__":
    copy_named_blobs(sys.argv[1:])
