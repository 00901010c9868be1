import re
from typing import Any

import sentry_sdk
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class InternalException(Exception):
    """
    All internal exceptions should inherit from this. We are handled
    vaguely publicly
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal failure.'
    default_code = 'internal_failure'

    def __init__(self, message: str | None = None, context: dict[Any, Any] | Any = None):
        self.message = message or self.default_detail
        self.context = context or dict()

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.message})'


class ValidationFailed(InternalException):
    """
    Input is well formed but breaks a domain rule e.g. an interval ending before it starts
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'validation_failed'


class ResourceConflict(InternalException):
    """
    Write would break an invariant held against existing records
    """

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflicts with an existing record.'
    default_code = 'conflict'


class ResourceNotFound(InternalException):
    """
    Record does not exist or is not visible to the caller
    """

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class APIException(Exception):
    """
    API view layer exceptions
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    default_code = 'invalid_request'

    # Match the internal interface message
    def __init__(self, message: str | None = None, code: int | None = None, error_type: str | None = None):
        self.message = message or self.default_detail
        self.code = code or self.status_code
        self.error_type = error_type

    @classmethod
    def from_internal(cls, exc: InternalException) -> 'APIException':
        """
        Surface an expected domain failure with its own status and message
        """
        return cls(message=exc.message, code=exc.status_code, error_type=exc.default_code)


async def internal_exception_handler(request: Request, exc: InternalException) -> JSONResponse:
    """
    Domain failures that escaped a router keep their status and message,
    anything else is an unexpected 500 with a vague body
    """
    if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning(f'unhandled domain exception {exc}')
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder({'detail': exc.message, 'error_type': exc.default_code}),
        )

    logger.exception(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({'detail': InternalException.default_detail}),
    )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """
    This catches validation errors and is registered at the app level
    """
    content = {'detail': exc.message}
    if exc.error_type:
        content['error_type'] = exc.error_type
    return JSONResponse(
        status_code=exc.code,
        content=jsonable_encoder(content),
    )


async def inbound_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    This catches pydantic validation errors and is registered at the app level
    """
    details = exc.errors()

    # Create a fingerprint based on the error locations
    error_locations = []
    for error in details:
        if 'loc' in error:
            loc_path = '.'.join(str(part) for part in error['loc'])
            error_locations.append(f"{error['type']}:{loc_path}")

    if error_locations:
        generalized_errors = []
        for location in error_locations:
            # Convert "extra_forbidden:body.0.my_field" to "extra_forbidden:body.my_field"
            parts = location.split(':', 1)
            if len(parts) != 2:
                continue

            error_type, field_path = parts
            clean_path = re.sub(r'\.[0-9]+(?=\.|$)', '', field_path)
            generalized_errors.append(f'{error_type}:{clean_path}')

        if generalized_errors:
            scope = sentry_sdk.get_current_scope()
            transaction_name = scope.transaction.name if scope.transaction else 'unknown'
            scope.fingerprint = [transaction_name] + list(set(generalized_errors))

    modified_details = []
    for error in details:
        modified_details.append(
            {
                'loc': error['loc'],
                'message': error['msg'],
                'input': error.get('input'),
                'type': error['type'],
            }
        )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({'detail': modified_details}),
    )
