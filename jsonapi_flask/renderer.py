#
# Rendering of JSON:API success and error documents
#
# - SuccessRenderer: serializes resources (or a collection of resources) into a "data" document
# - ErrorsRenderer: serializes errors into an "errors" document
#
# The serializer of a resource is selected in the following order:
# 1. the "serializer" render option (a SerializableResource subclass or a dict: class name -> SerializableResource)
# 2. the JSONAPI_CLASS config dict (class name -> SerializableResource)
# 3. ModelSerializer, for SQLAlchemy mapped instances
#
from collections.abc import Mapping
from typing import Any, Dict, List, Optional
import sqlalchemy
import sqlalchemy.orm
import jsonapi_flask
from .config import get_config
from .errors import JsonapiError, UndefinedSerializerError
from .jsonapi_types import JSONAPIErrorObject, JSONAPIResourceObject, JSONAPIResponseDocument


class SerializableResource:
    """
    Declarative resource serializer:

        class SerializableUser(SerializableResource):
            jsonapi_type = "users"
            attributes = ("name", "email")
    """

    jsonapi_type: Optional[str] = None
    attributes: tuple = ()
    id_attribute = "id"

    @classmethod
    def get_type(cls, obj) -> str:
        return cls.jsonapi_type or type(obj).__name__

    @classmethod
    def get_id(cls, obj) -> Optional[str]:
        obj_id = getattr(obj, cls.id_attribute, None)
        return None if obj_id is None else str(obj_id)

    @classmethod
    def get_attributes(cls, obj) -> Dict[str, Any]:
        return {name: getattr(obj, name, None) for name in cls.attributes}

    @classmethod
    def meta(cls, obj) -> Optional[Dict[str, Any]]:
        return None

    @classmethod
    def links(cls, obj) -> Optional[Dict[str, Any]]:
        return None

    @classmethod
    def serialize(cls, obj, fields: Optional[Dict[str, List[str]]] = None) -> JSONAPIResourceObject:
        """
        :param obj: object to serialize
        :param fields: sparse fieldsets, resource type -> attribute names
        :return: JSON:API resource object
        """
        jsonapi_type = cls.get_type(obj)
        result = {"type": jsonapi_type}
        obj_id = cls.get_id(obj)
        if obj_id is not None:
            result["id"] = obj_id
        attributes = cls.get_attributes(obj)
        if fields and jsonapi_type in fields:
            attributes = {k: v for k, v in attributes.items() if k in fields[jsonapi_type]}
        if attributes:
            result["attributes"] = attributes
        meta = cls.meta(obj)
        if meta:
            result["meta"] = meta
        links = cls.links(obj)
        if links:
            result["links"] = links
        return result


class ModelSerializer(SerializableResource):
    """
    Serializer for SQLAlchemy mapped instances:
    - type: the __tablename__
    - id: the primary key value(s), composite keys are joined with ","
    - attributes: the column attributes that aren't part of the primary key
    """

    @staticmethod
    def is_model(obj) -> bool:
        return isinstance(sqlalchemy.inspect(obj, raiseerr=False), sqlalchemy.orm.InstanceState)

    @classmethod
    def get_type(cls, obj) -> str:
        return getattr(obj, "__tablename__", type(obj).__name__)

    @classmethod
    def _pk_keys(cls, obj):
        mapper = sqlalchemy.inspect(obj).mapper
        return [mapper.get_property_by_column(col).key for col in mapper.primary_key]

    @classmethod
    def get_id(cls, obj) -> Optional[str]:
        values = [getattr(obj, key) for key in cls._pk_keys(obj)]
        if any(value is None for value in values):
            return None
        return ",".join(str(value) for value in values)

    @classmethod
    def get_attributes(cls, obj) -> Dict[str, Any]:
        pk_keys = cls._pk_keys(obj)
        mapper = sqlalchemy.inspect(obj).mapper
        return {prop.key: getattr(obj, prop.key) for prop in mapper.column_attrs if prop.key not in pk_keys}


def select_serializer(obj, options: Dict[str, Any]):
    """
    :param obj: object to render
    :param options: render options
    :return: SerializableResource subclass
    """
    class_name = type(obj).__name__
    serializer = options.get("serializer")
    if isinstance(serializer, Mapping):
        serializer = serializer.get(class_name)
    if serializer is None:
        serializer = (get_config("JSONAPI_CLASS") or {}).get(class_name)
    if serializer is None and ModelSerializer.is_model(obj):
        serializer = ModelSerializer
    if serializer is None:
        raise UndefinedSerializerError(f"No serializer for {class_name}")
    return serializer


def _top_level(document: Dict[str, Any], options: Dict[str, Any]) -> JSONAPIResponseDocument:
    for member in ("meta", "links"):
        if options.get(member):
            document[member] = options[member]
    jsonapi = options.get("jsonapi", get_config("JSONAPI_OBJECT"))
    if jsonapi:
        document["jsonapi"] = jsonapi
    return document


class SuccessRenderer:
    """
    Renders a resource, a list of resources or None as a JSON:API document
    """

    def render(self, resources, options: Optional[Dict[str, Any]] = None) -> JSONAPIResponseDocument:
        options = options or {}
        fields = options.get("fields")
        if resources is None:
            data = None
        elif isinstance(resources, (list, tuple)):
            data = [select_serializer(obj, options).serialize(obj, fields) for obj in resources]
        else:
            data = select_serializer(resources, options).serialize(resources, fields)
        return _top_level({"data": data}, options)


class ErrorsRenderer:
    """
    Renders errors as a JSON:API errors document. Errors can be passed as
    - JsonapiError instances
    - a list of JSON:API error objects (dicts)
    - a validation errors dict: attribute name -> message(s), the "pointers" option (output key -> pointer)
      is used to reference the attribute in the request document
    """

    def render(self, errors, options: Optional[Dict[str, Any]] = None) -> JSONAPIResponseDocument:
        options = options or {}
        if isinstance(errors, Mapping):
            error_list = self._validation_errors(errors, options.get("pointers") or {}, options.get("status"))
        else:
            if isinstance(errors, JsonapiError):
                errors = [errors]
            error_list = [self._error_object(error) for error in errors]
        return _top_level({"errors": error_list}, options)

    @staticmethod
    def _error_object(error) -> JSONAPIErrorObject:
        if isinstance(error, JsonapiError):
            return error.to_dict()
        if isinstance(error, Mapping):
            return dict(error)
        jsonapi_flask.log.warning(f"Rendering unexpected error type {type(error)}")
        return {"title": str(error)}

    @staticmethod
    def _validation_errors(errors: Mapping, pointers: Mapping, status=None) -> List[JSONAPIErrorObject]:
        result = []
        for field, messages in errors.items():
            if isinstance(messages, str):
                messages = [messages]
            for message in messages:
                error = {"title": f"Invalid {field}", "detail": f"{field} {message}"}
                if status is not None:
                    error["status"] = str(status)
                pointer = pointers.get(field)
                if pointer is not None:
                    error["source"] = {"pointer": str(pointer)}
                result.append(error)
        return result
