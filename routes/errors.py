"""JSON error handlers for the API."""

from werkzeug.exceptions import HTTPException

from constants import Messages
from core.exceptions import NotFoundError, StoreError, ValidationError
from core.logger import logger
from routes.helpers import error_response


def register_error_handlers(app):
    """Translate service errors into JSON responses."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        logger.info(f"Rejected request: {str(e)}")
        return error_response(str(e), 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        logger.info(str(e))
        return error_response(str(e), 404)

    @app.errorhandler(StoreError)
    def handle_store_error(e):
        # Details were logged where the store failure was caught
        return error_response(Messages.STORE_FAILURE, 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.error(f"Unhandled error: {str(e)}", exc_info=True)
        return error_response(Messages.UNEXPECTED_ERROR, 500)
