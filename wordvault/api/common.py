from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    DuplicateItemError,
    ImportFileError,
    ItemNotFoundError,
    PersistenceError,
    ValidationError,
    WordVaultError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (DuplicateItemError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ImportFileError, status.HTTP_400_BAD_REQUEST),
    (ItemNotFoundError, status.HTTP_404_NOT_FOUND),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def http_error(exc: WordVaultError) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            if code >= 500:
                logger.warning("Request failed: %s", exc)
            return HTTPException(status_code=code, detail=str(exc))
    logger.exception("Unhandled journal error")
    return HTTPException(status_code=500, detail="Internal error")
