"""
http://jsonapi.org/format/#content-negotiation-servers

Server Responsibilities
Servers MUST send all JSON API data in response documents with the header
"Content-Type: application/vnd.api+json" without any media type parameters.

Servers MUST respond with a 415 Unsupported Media Type status code if a request specifies the header
"Content-Type: application/vnd.api+json" with any media type parameters.
This check is enabled with the JSONAPI_STRICT_MEDIA_TYPE config option
"""

from flask import Request
import jsonapi_flask
from .config import get_bool_config
from .errors import UnsupportedMediaTypeError, ValidationError

MEDIA_TYPE = "application/vnd.api+json"
# media type parameters allowed by JSON:API 1.1
ALLOWED_MEDIA_TYPE_PARAMS = ("ext", "profile")
BODY_METHODS = ("POST", "PATCH", "PUT", "DELETE")


# pylint: disable=too-many-ancestors
class JSONAPIRequest(Request):
    """
    Parse the jsonapi-related request properties:
    - header: Content-Type should be "application/vnd.api+json"
    - body: valid json

    Views decorated with `deserializable_resource` store their results in
    `jsonapi_params` and `jsonapi_pointers`
    """

    jsonapi_content_types = ["application/json", MEDIA_TYPE]
    is_jsonapi = False  # indicates whether this is a jsonapi request

    def __init__(self, *args, **kwargs):
        """
        constructor
        """
        super().__init__(*args, **kwargs)
        self.extensions = set()
        self.profiles = set()
        self.media_type_params = {}
        self.jsonapi_params = {}
        self.jsonapi_pointers = {}
        self.parse_content_type()

    def parse_content_type(self):
        """
        Check if the request content type is jsonapi and any requested extensions
        """
        if not isinstance(self.content_type, str):  # pragma: no cover
            return

        content_type, *params = self.content_type.split(";")
        if content_type.strip() not in self.jsonapi_content_types:
            return

        self.is_jsonapi = True
        for param in params:
            name, _, value = param.strip().partition("=")
            if not name:
                continue
            value = value.strip('"')
            self.media_type_params[name] = value
            if name == "ext":
                self.extensions.update(value.split())
            elif name == "profile":
                self.profiles.update(value.split())

    def check_media_type(self):
        """
        :raises UnsupportedMediaTypeError: if the JSON:API media type was sent with unsupported parameters
        """
        if not self.is_jsonapi or not get_bool_config("JSONAPI_STRICT_MEDIA_TYPE"):
            return
        invalid = [name for name in self.media_type_params if name not in ALLOWED_MEDIA_TYPE_PARAMS]
        if invalid:
            raise UnsupportedMediaTypeError(f'Invalid media type parameters {invalid} in "{self.content_type}"')

    def get_jsonapi_payload(self):
        """
        :return: jsonapi request payload, None when the request has no body (eg. GET or DELETE)
        """
        if self.method not in BODY_METHODS or not self.get_data():
            return None
        if not self.is_jsonapi:
            jsonapi_flask.log.warning(f'Invalid Media Type! "{self.content_type}"')
        self.check_media_type()
        result = self.get_json(force=True, silent=True)
        if not isinstance(result, dict):
            raise ValidationError(f"Invalid JSON Payload : {result}")
        return result
