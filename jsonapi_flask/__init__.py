# flake8: noqa: F401
#
# jsonapi_flask: JSON:API request deserialization and response rendering for Flask
#
from .jsonapi_init import JSONAPI, log
from .errors import (
    JsonapiError,
    ValidationError,
    MalformedDocumentError,
    UnsupportedMediaTypeError,
    GenericError,
    SchemaDefinitionError,
    UndefinedSerializerError,
    NotFoundError,
)
from .pointer import PointerPath
from .schema import KeyTransform, FieldSpec, ResourceSchema, SchemaBuilder, SchemaRegistry
from .deserializer import DeserializationEngine, DeserializationResult, deserialize, deserialize_collection
from .renderer import SerializableResource, ModelSerializer, SuccessRenderer, ErrorsRenderer
from .controller import deserializable_resource, jsonapi_params, jsonapi_pointers, render_jsonapi, render_jsonapi_errors
from .request import JSONAPIRequest, MEDIA_TYPE
from .response import JSONAPIResponse
from .json_encoder import JSONAPIJSONProvider, JSONAPIJSONEncoder
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "JSONAPI",
    "MEDIA_TYPE",
    # deserialization:
    "PointerPath",
    "KeyTransform",
    "FieldSpec",
    "ResourceSchema",
    "SchemaBuilder",
    "SchemaRegistry",
    "DeserializationEngine",
    "DeserializationResult",
    "deserialize",
    "deserialize_collection",
    # rendering:
    "SerializableResource",
    "ModelSerializer",
    "SuccessRenderer",
    "ErrorsRenderer",
    # flask:
    "deserializable_resource",
    "jsonapi_params",
    "jsonapi_pointers",
    "render_jsonapi",
    "render_jsonapi_errors",
    "JSONAPIRequest",
    "JSONAPIResponse",
    "JSONAPIJSONProvider",
    "JSONAPIJSONEncoder",
    # Errors:
    "JsonapiError",
    "ValidationError",
    "MalformedDocumentError",
    "UnsupportedMediaTypeError",
    "GenericError",
    "SchemaDefinitionError",
    "UndefinedSerializerError",
    "NotFoundError",
)
