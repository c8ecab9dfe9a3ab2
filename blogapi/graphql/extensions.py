"""
Strawberry schema extensions.

``ErrorCodesExtension`` is the GraphQL counterpart of the FastAPI exception
handlers: errors raised as :class:`BlogAPIError` keep their message and gain
``extensions.code``; anything else is masked so internals do not leak.
"""

import logging
from collections.abc import Iterator

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from blogapi.exceptions import BlogAPIError, ErrorCode
from blogapi.middleware.logging import GRAPHQL_OPERATION_ATTR
from blogapi.utils.metrics import GRAPHQL_OPERATIONS_TOTAL

logger = logging.getLogger(__name__)

MASKED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def format_error(error: GraphQLError) -> GraphQLError:
    original = error.original_error
    if original is None:
        # syntax and validation errors are safe to show as they are
        return error

    if isinstance(original, BlogAPIError):
        message = original.message
        extensions = {"code": original.error_code.value}
        if original.details:
            extensions["details"] = original.details
    else:
        logger.error(f"Unhandled GraphQL resolver error: {original!r}", exc_info=original)
        message = MASKED_ERROR_MESSAGE
        extensions = {"code": ErrorCode.INTERNAL_ERROR.value}

    return GraphQLError(
        message=message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=original,
        extensions=extensions,
    )


class ErrorCodesExtension(SchemaExtension):
    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result is not None and result.errors:
            result.errors = [format_error(e) for e in result.errors]


class OperationMetricsExtension(SchemaExtension):
    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        status = "error" if result is not None and result.errors else "success"
        operation = self.execution_context.operation_name or "anonymous"
        GRAPHQL_OPERATIONS_TOTAL.labels(operation=operation, status=status).inc()

        # picked up by the access log middleware
        request = getattr(self.execution_context.context, "request", None)
        if request is not None:
            setattr(request.state, GRAPHQL_OPERATION_ATTR, operation)
