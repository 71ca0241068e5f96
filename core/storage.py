# core/storage.py

"""
Persistence collaborator for the AppState snapshot.

The whole snapshot is kept as a single JSON document on the local filesystem, using the same
camelCase keys as the browser store it replaces. Loading never fails: a missing, unreadable, or
malformed document yields an empty snapshot (and a logged warning). Saving reports failure through
a `Response` and never raises, so a failed write leaves the in-memory snapshot as the only copy
until the next successful save.

Backups use the same document format. Restoring validates the file strictly and reports
`ErrorCode.MALFORMED_BACKUP` without producing a snapshot if anything is off.
"""

from __future__ import annotations

import json
import os
from typing import Any

from core.logger import get_logger
from core.response import ErrorCode, Response
from models.app_state import AppState

log = get_logger(__name__)


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, data: dict) -> None:
    """
    Serializes `data` to JSON and writes it to `path`, creating parent directories.

    Notes:
        - This intentionally overwrites existing data.
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


class JsonStorage:
    """
    Reads and writes the snapshot at a fixed file path.
    """

    def __init__(self, path: str):
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> AppState:
        """
        Loads the stored snapshot, falling back to an empty one.

        Returns:
            AppState: The stored snapshot, validated leniently (malformed records are skipped),
                or `AppState.empty()` when nothing is stored or the document cannot be read.
        """
        if not os.path.exists(self._path):
            log.debug("state_not_found", path=self._path)
            return AppState.empty()

        try:
            return AppState.from_dict(read_json(self._path))

        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
            log.warning("state_load_failed", path=self._path, error=str(e))
            return AppState.empty()

    def save(self, state: AppState) -> Response:
        """
        Serializes and writes the snapshot.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was written.
                    - False if serialization or the disk write failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.PERSISTENCE_FAILURE` on any failure.
                - status_code (int | None):
                    - 200 on success
                    - 500 on failure

        Notes:
            - Failures are logged and returned, never raised.
        """
        try:
            write_json(self._path, state.to_dict())

        except (OSError, TypeError, ValueError) as e:
            log.warning("state_save_failed", path=self._path, error=str(e))
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.PERSISTENCE_FAILURE,
                status_code=500,
            )

        else:
            log.debug("state_saved", path=self._path)
            return Response.succeed(detail="Data successfully saved to disk.")


# === backup and restore ===


def dump_backup(state: AppState, path: str) -> Response:
    """
    Writes a full snapshot backup to `path`.

    Returns:
        Response: Succeeds with `data["path"]`; fails with `ErrorCode.PERSISTENCE_FAILURE` if the write fails.
    """
    try:
        write_json(path, state.to_dict())

    except (OSError, TypeError, ValueError) as e:
        log.warning("backup_failed", path=path, error=str(e))
        return Response.fail(
            detail=f"Failed to write backup: {e}",
            error=ErrorCode.PERSISTENCE_FAILURE,
            status_code=500,
        )

    else:
        log.info("backup_written", path=path)
        return Response.succeed(
            detail=f"Backup written to {path}.",
            data={
                "path": path,
            },
        )


def restore_backup(path: str) -> Response:
    """
    Reads and strictly validates a backup file.

    Args:
        path (str): The backup file to read.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the file holds a valid snapshot.
                - False if the file cannot be read, is not JSON, or does not have a valid AppState shape.
            - error (ErrorCode | str | None):
                - `ErrorCode.PERSISTENCE_FAILURE` if the file cannot be read.
                - `ErrorCode.MALFORMED_BACKUP` if the content is not a valid snapshot.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "state" (AppState): The restored snapshot.

    Notes:
        - This function does not touch any live state; installing the snapshot is up to the caller.
    """
    try:
        payload = read_json(path)
        state = AppState.from_dict(payload, strict=True)

    except OSError as e:
        log.warning("backup_read_failed", path=path, error=str(e))
        return Response.fail(
            detail=f"Failed to read backup: {e}",
            error=ErrorCode.PERSISTENCE_FAILURE,
            status_code=500,
        )

    except ValueError as e:
        log.warning("backup_malformed", path=path, error=str(e))
        return Response.fail(
            detail=f"Backup file is malformed: {e}",
            error=ErrorCode.MALFORMED_BACKUP,
        )

    else:
        return Response.succeed(
            detail="Backup successfully restored.",
            data={
                "state": state,
            },
        )
