#
# Flask view helpers
#
# - deserializable_resource: view decorator that deserializes the JSON:API request document
#   into request.jsonapi_params[name] and request.jsonapi_pointers
# - render_jsonapi / render_jsonapi_errors: create JSON:API responses
#
# Usage:
#
#   @app.route("/users", methods=["POST"])
#   @deserializable_resource("user", lambda schema: schema.register("name", rename="full_name"))
#   def create_user():
#       user = User(**jsonapi_params("user"))
#       ...
#       return render_jsonapi(user, status=201)
#
from functools import wraps
from http import HTTPStatus
from flask import current_app, request
import jsonapi_flask
from .deserializer import engine
from .errors import JsonapiError, SchemaDefinitionError
from .renderer import ErrorsRenderer, SuccessRenderer
from .response import JSONAPIResponse
from .schema import DEFAULT_SCHEMA, ResourceSchema

DEFAULT_RENDERERS = {"jsonapi": SuccessRenderer(), "jsonapi_error": ErrorsRenderer()}


def _extension():
    return current_app.extensions.get("jsonapi")


def _resolve_schema(name, schema):
    if schema is not None:
        return schema
    ext = _extension()
    if ext is None:
        return DEFAULT_SCHEMA
    return ext.registry.get(name)


def get_jsonapi_payload():
    """
    :return: the request document, None for requests without a body (eg. GET)
    """
    if hasattr(request, "get_jsonapi_payload"):
        return request.get_jsonapi_payload()
    # the JSONAPIRequest class wasn't installed
    if request.method in ("GET", "HEAD", "OPTIONS") or not request.get_data():
        return None
    return request.get_json(force=True)


def deserializable_resource(name, schema=None, key_format=None, collection=False):
    """
    :param name: name of the parameters in request.jsonapi_params
    :param schema: ResourceSchema, or a function that configures a SchemaBuilder.
                   When omitted, the schema registered with JSONAPI.register_schema(name, ...) is used
    :param key_format: key format function, used when `schema` is a configure function or omitted.
                       A ResourceSchema already carries its key format, combining both raises SchemaDefinitionError
    :param collection: deserialize an array of resource objects
    :return: view decorator
    """
    if isinstance(schema, ResourceSchema) and key_format is not None:
        raise SchemaDefinitionError(f"{name}: pass the key format to ResourceSchema.define instead of deserializable_resource")
    if schema is not None and not isinstance(schema, ResourceSchema):
        schema = ResourceSchema.define(configure=schema, key_format=key_format)
    elif schema is None and key_format is not None:
        schema = ResourceSchema.define(key_format=key_format)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            document = get_jsonapi_payload()
            if document is not None:
                if getattr(request, "jsonapi_params", None) is None:
                    request.jsonapi_params = {}
                resolved = _resolve_schema(name, schema)
                if collection:
                    results = engine.deserialize_collection(document, resolved)
                    request.jsonapi_params[name] = [result.attributes for result in results]
                    request.jsonapi_pointers = [result.pointers for result in results]
                else:
                    result = engine.deserialize(document, resolved)
                    request.jsonapi_params[name] = result.attributes
                    request.jsonapi_pointers = result.pointers
                jsonapi_flask.log.debug(f"Deserialized {name}: {request.jsonapi_params[name]}")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def jsonapi_params(name):
    """
    :param name: name passed to deserializable_resource
    :return: deserialized attributes
    """
    return getattr(request, "jsonapi_params", {}).get(name)


def jsonapi_pointers():
    """
    :return: output key -> JSON Pointer string for the deserialized resource
    """
    pointers = getattr(request, "jsonapi_pointers", {})
    if isinstance(pointers, list):
        return [{key: str(pointer) for key, pointer in item.items()} for item in pointers]
    return {key: str(pointer) for key, pointer in pointers.items()}


def _renderer(name):
    ext = _extension()
    if ext is None:
        return DEFAULT_RENDERERS[name]
    return ext.renderers[name]


def _make_response(document, status, headers=None):
    body = current_app.json.dumps(document)
    return JSONAPIResponse.from_document(body, status=status, headers=headers)


def render_jsonapi(resources, status=HTTPStatus.OK, headers=None, **options):
    """
    :param resources: resource, list of resources or None
    :param status: HTTP status code
    :param options: render options: serializer, fields, meta, links, jsonapi
    :return: JSON:API response
    """
    document = _renderer("jsonapi").render(resources, options)
    return _make_response(document, status, headers)


def render_jsonapi_errors(errors, status=HTTPStatus.BAD_REQUEST, headers=None, **options):
    """
    :param errors: JsonapiError, error objects or a dict of validation errors
    :param status: HTTP status code
    :param options: render options: pointers, meta, links, jsonapi
    :return: JSON:API errors response
    """
    if isinstance(errors, dict) and "pointers" not in options:
        # validation errors reference the deserialized request document
        pointers = getattr(request, "jsonapi_pointers", {})
        options["pointers"] = pointers if isinstance(pointers, dict) else {}
    document = _renderer("jsonapi_error").render(errors, options)
    return _make_response(document, status, headers)


def handle_jsonapi_error(exc: JsonapiError):
    """
    Flask error handler: render a JsonapiError as a JSON:API errors document
    """
    jsonapi_flask.log.debug(f"Handling {type(exc).__name__}: {exc.message}")
    return render_jsonapi_errors(exc, status=exc.status_code)
