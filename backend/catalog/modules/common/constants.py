"""HTTP status codes for the catalog's domain errors."""

from typing import Dict, Type

from fastapi import status

from .exceptions import AuthorHasBooksError, DomainError, ResourceNotFoundError

# Checked in order; the first matching class wins.
EXCEPTION_STATUS_CODES: Dict[Type[DomainError], int] = {
    ResourceNotFoundError: status.HTTP_404_NOT_FOUND,
    AuthorHasBooksError: status.HTTP_409_CONFLICT,
}
