# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions are caught by the handler registered in JSONAPI.init_app and rendered
# as a JSON:API errors document, for example:
# {
#   "errors": [
#     {
#       "title": "Validation Error: ",
#       "detail": "Validation Error: missing data member",
#       "status": "400",
#       "source": {"pointer": "/data"}
#     }
#   ]
# }
#
import traceback
from http import HTTPStatus
from flask import has_request_context, request
from sqlalchemy.exc import DontWrapMixin
from werkzeug.exceptions import NotFound
import jsonapi_flask
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class JsonapiError(Exception, DontWrapMixin):
    """
    Base class for the errors that are rendered as a JSON:API errors document
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""
    api_code = None
    pointer = None

    def to_dict(self):
        """
        :return: JSON:API error object
        """
        result = dict(title=self.message, detail=getattr(self, "detail", self.message), status=str(self.status_code))
        if self.api_code is not None:
            result["code"] = str(self.api_code)
        if self.pointer is not None:
            result["source"] = {"pointer": str(self.pointer)}
        return result


class NotFoundError(JsonapiError, NotFound):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value, api_code=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        JsonapiError.__init__(self)
        self.status_code = status_code
        self.api_code = api_code
        jsonapi_flask.log.error("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(JsonapiError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code
        jsonapi_flask.log.error("Generic Error: %s", message)
        if is_debug():
            if has_request_context():
                jsonapi_flask.log.info(f"Error in {request.url}")
            jsonapi_flask.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class SchemaDefinitionError(GenericError):
    """
    This exception is raised when a resource schema is declared incorrectly,
    eg. a source key registered twice or a transform that doesn't return a mapping
    """

    message = "Schema Definition Error: "


class UndefinedSerializerError(GenericError):
    """
    This exception is raised when no serializer can be selected for an object that is rendered
    """

    message = "Undefined Serializer: "


class ValidationError(JsonapiError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code
        jsonapi_flask.log.warning("ValidationError: %s", message)
        self.message += message


class MalformedDocumentError(ValidationError):
    """
    This exception is raised when the request document lacks a usable "data" member
    The pointer references the offending location in the request document
    """

    message = "Malformed Document: "

    def __init__(self, message="", pointer=None, status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        super().__init__(message, status_code, api_code)
        self.pointer = pointer


class UnsupportedMediaTypeError(JsonapiError):
    """
    Servers MUST respond with a 415 Unsupported Media Type status code if a request specifies the header
    "Content-Type: application/vnd.api+json" with any media type parameters other than "ext" and "profile"
    """

    status_code = HTTPStatus.UNSUPPORTED_MEDIA_TYPE.value
    message = "Unsupported Media Type: "

    def __init__(self, message="", status_code=HTTPStatus.UNSUPPORTED_MEDIA_TYPE.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code
        jsonapi_flask.log.warning("UnsupportedMediaTypeError: %s", message)
        self.message += message
