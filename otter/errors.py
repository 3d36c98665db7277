# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#      "title": "Authorization Error: ",
#      "detail": "Authorization Error: ",
#      "code": 403
# }
#
import traceback
from flask import request, has_request_context
from werkzeug.exceptions import NotFound
import otter
from sqlalchemy.exc import DontWrapMixin
from http import HTTPStatus
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class OtterError(Exception, DontWrapMixin):
    """
    Base class for the errors raised while resolving and serializing resources
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""


class NotFoundError(OtterError, NotFound):
    """
    This exception is raised when a key doesn't resolve to an existing model row
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value, api_code=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        NotFound.__init__(self)
        self.status_code = status_code
        self.api_code = api_code or status_code
        otter.log.error("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class UnAuthorizedError(OtterError):
    """
    This exception is raised when the dashboard gate denies access
    we use FORBIDDEN(403) instead of UNAUTHORIZED(401)
    """

    status_code = HTTPStatus.FORBIDDEN.value
    message = "Authorization Error: "

    def __init__(self, message="", status_code=HTTPStatus.FORBIDDEN.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code or status_code
        otter.log.error("UnAuthorizedError: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(OtterError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code or status_code
        otter.log.error("%s%s", self.__class__.message, message)
        if is_debug():
            if has_request_context():
                otter.log.info(f"Error in {request.url}")
            otter.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class UnresolvedResourceError(GenericError):
    """
    This exception is raised when a declared relation points to a resource
    that isn't registered under the configured namespace
    """

    message = "Unresolved Resource: "

    def __init__(self, resource_name, namespace="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        self.resource_name = resource_name
        self.namespace = namespace
        location = f'{namespace}.{resource_name}' if namespace else resource_name
        super().__init__(f'No Otter resource "{location}"', status_code, api_code)


class UnresolvedRelationError(GenericError):
    """
    This exception is raised when a declared relation name isn't an attribute of the model
    """

    message = "Unresolved Relation: "

    def __init__(self, model, relation_name, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        self.model = model
        self.relation_name = relation_name
        super().__init__(f'"{model.__name__}" has no relation "{relation_name}"', status_code, api_code)


class SystemValidationError(OtterError):
    """
    This exception is raised when invalid input has been detected (server side input),
    f.i. a malformed relation declaration
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code or status_code
        otter.log.error("ValidationError: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class ValidationError(OtterError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code or status_code
        otter.log.warning("ValidationError: %s", message)
        self.message += message
