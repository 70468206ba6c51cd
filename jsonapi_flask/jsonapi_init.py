import logging
import os
import sys
import flask.app
from flask import Flask
from typing import Any, Dict, Optional
from .controller import DEFAULT_RENDERERS, handle_jsonapi_error
from .errors import JsonapiError
from .json_encoder import JSONAPIJSONProvider
from .request import JSONAPIRequest
from .response import JSONAPIResponse
from .schema import ResourceSchema, SchemaRegistry


class JSONAPI:
    """This class configures the Flask application to parse and render JSON:API documents
    :param app: a Flask application.
    :param kwargs: configuration options, they override the app.config values
    """

    # Configuration settings are stored as class variables, they're used when the option isn't in app.config
    JSONAPI_REGISTER_PARAMETER_PARSER = True
    JSONAPI_REGISTER_RENDERERS = True
    JSONAPI_REGISTER_ERROR_HANDLERS = True
    JSONAPI_STRICT_MEDIA_TYPE = False
    JSONAPI_OBJECT = None  # top level "jsonapi" member of rendered documents, eg. {"version": "1.0"}
    JSONAPI_CLASS: Dict[str, Any] = {}  # class name -> SerializableResource
    LOGLEVEL = logging.WARNING

    def __init__(self, app: Optional[flask.app.Flask] = None, registry: Optional[SchemaRegistry] = None, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        self.registry = registry if registry is not None else SchemaRegistry()
        self.renderers = dict(DEFAULT_RENDERERS)
        if app is not None:
            self.init_app(app, **kwargs)

    def init_app(self, app: flask.app.Flask, **kwargs) -> None:
        """
        Application initialization
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        for conf_name, conf_val in kwargs.items():
            app.config[conf_name] = conf_val
        for conf_name in ("JSONAPI_REGISTER_PARAMETER_PARSER", "JSONAPI_REGISTER_RENDERERS", "JSONAPI_REGISTER_ERROR_HANDLERS"):
            app.config.setdefault(conf_name, getattr(JSONAPI, conf_name))

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        if app.config["JSONAPI_REGISTER_PARAMETER_PARSER"]:
            app.request_class = JSONAPIRequest

        if app.config["JSONAPI_REGISTER_RENDERERS"]:
            app.response_class = JSONAPIResponse
            app.json = JSONAPIJSONProvider(app)

        if app.config["JSONAPI_REGISTER_ERROR_HANDLERS"]:
            app.register_error_handler(JsonapiError, handle_jsonapi_error)

        app.extensions["jsonapi"] = self

        @app.before_request
        def freeze_schemas():
            # schemas can't be registered once requests are being handled
            self.registry.freeze()

    def register_schema(self, name: str, schema=None, key_format=None) -> ResourceSchema:
        """
        :param name: resource name, as used by deserializable_resource
        :param schema: ResourceSchema or a function that configures a SchemaBuilder
        :param key_format: key format function
        :return: the registered ResourceSchema
        """
        if not isinstance(schema, ResourceSchema):
            schema = ResourceSchema.define(configure=schema, key_format=key_format)
        return self.registry.register(name, schema)

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = JSONAPI.init_logging(LOGLEVEL)
