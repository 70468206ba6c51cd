"""
Resource schemas describe how the "data" member of a JSON:API request document is flattened
into request parameters.

A schema is declared once, when the routes are set up, and is read-only afterwards:

    def configure(schema):
        schema.key_format(KeyTransform.underscore())
        schema.register("title", rename="name")

        @schema.attribute("fullName")
        def split_name(value):
            first, _, last = value.partition(" ")
            return {"first_name": first, "last_name": last}

    user_schema = ResourceSchema.define("users", configure)

Keys that aren't registered are passed through, with only the key format applied.
"""
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional
import inflect
import jsonapi_flask
from .errors import SchemaDefinitionError

Transform = Callable[..., Mapping[str, Any]]

inflector = inflect.engine()


class KeyTransform:
    """
    Pure function from an input key name to an output key name, applied to every extracted key
    """

    __slots__ = ("func",)

    def __init__(self, func: Optional[Callable[[str], str]] = None) -> None:
        object.__setattr__(self, "func", func)

    def __setattr__(self, name, value):
        raise AttributeError("KeyTransform is immutable")

    def apply(self, key: str) -> str:
        if self.func is None:
            return key
        return self.func(key)

    __call__ = apply

    @classmethod
    def identity(cls) -> "KeyTransform":
        return cls()

    @classmethod
    def underscore(cls) -> "KeyTransform":
        """firstName, first-name => first_name"""
        return cls(underscore)

    @classmethod
    def camel_lower(cls) -> "KeyTransform":
        """first_name, first-name => firstName"""
        return cls(camel_lower)

    @classmethod
    def dasherize(cls) -> "KeyTransform":
        """first_name, firstName => first-name"""
        return cls(lambda key: underscore(key).replace("_", "-"))

    def __eq__(self, other):
        if not isinstance(other, KeyTransform):
            return NotImplemented
        return self.func == other.func

    def __hash__(self):
        return hash(self.func)

    def __repr__(self):
        return f"KeyTransform({getattr(self.func, '__name__', self.func)})"


def underscore(key: str) -> str:
    key = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", key)
    key = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", key)
    return key.replace("-", "_").lower()


def camel_lower(key: str) -> str:
    head, *tail = underscore(key).split("_")
    return head + "".join(part.capitalize() for part in tail)


def _to_mapping(result: Any, source_key: str) -> Dict[str, Any]:
    if not isinstance(result, Mapping):
        raise SchemaDefinitionError(f'Transform for "{source_key}" returned {type(result).__name__}, expected a mapping')
    return dict(result)


@dataclass(frozen=True)
class FieldSpec:
    """
    Transformation rule for one attribute or relationship of a resource
    :param source_key: attribute or relationship name in the request document
    :param rename: output key, the key format is applied to it
    :param transform: function(value) -> {output_key: output_value, ...}
                      when `rename` is set as well, the formatted output key is passed as second argument:
                      function(value, key) -> {key: ..., ...}
    :param relationship: whether the rule applies to a relationship linkage

    To-many relationship defaults use the singular form of the key: comments => comment_ids, comment_types
    """

    source_key: str
    rename: Optional[str] = None
    transform: Optional[Transform] = None
    relationship: bool = False

    def apply(self, value: Any, key_format: KeyTransform, context: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        :param value: raw attribute value or relationship linkage
        :param key_format: the schema key format
        :param context: extra keyword arguments for the transform
        :return: {output_key: output_value}, with one or more items
        """
        key = key_format.apply(self.rename if self.rename is not None else self.source_key)
        if self.transform is not None:
            args = (value, key) if self.rename is not None else (value,)
            result = self.transform(*args, **(context or {}))
            return _to_mapping(result, self.source_key)

        if not self.relationship:
            return {key: value}
        if isinstance(value, list):
            singular = (key and inflector.singular_noun(key)) or key
            return {f"{singular}_ids": [item.get("id") for item in value], f"{singular}_types": [item.get("type") for item in value]}
        if value is None:
            return {f"{key}_id": None, f"{key}_type": None}
        return {f"{key}_id": value.get("id"), f"{key}_type": value.get("type")}


@dataclass(frozen=True)
class ResourceSchema:
    """
    Immutable set of FieldSpecs plus the key format used to deserialize one resource type
    """

    resource_type: Optional[str] = None
    key_format: KeyTransform = field(default_factory=KeyTransform)
    fields: Mapping[str, FieldSpec] = field(default_factory=lambda: MappingProxyType({}))
    relationships: Mapping[str, FieldSpec] = field(default_factory=lambda: MappingProxyType({}))

    def attribute_spec(self, source_key: str) -> FieldSpec:
        """
        :param source_key: attribute name
        :return: the registered FieldSpec or the default (pass-through) FieldSpec
        """
        spec = self.fields.get(source_key)
        if spec is None:
            return FieldSpec(source_key)
        return spec

    def relationship_spec(self, source_key: str) -> FieldSpec:
        spec = self.relationships.get(source_key)
        if spec is None:
            return FieldSpec(source_key, relationship=True)
        return spec

    @classmethod
    def define(cls, resource_type=None, configure=None, key_format=None) -> "ResourceSchema":
        """
        :param resource_type: JSON:API resource type, eg. "users"
        :param configure: function that is called with a SchemaBuilder
        :param key_format: key format function
        :return: ResourceSchema
        """
        builder = SchemaBuilder(resource_type)
        if key_format is not None:
            builder.key_format(key_format)
        if configure is not None:
            configure(builder)
        return builder.build()


class SchemaBuilder:
    """
    Accumulates the FieldSpecs and the key format of a ResourceSchema
    """

    def __init__(self, resource_type: Optional[str] = None) -> None:
        self.resource_type = resource_type
        self._key_format = KeyTransform()
        self._fields: Dict[str, FieldSpec] = {}
        self._relationships: Dict[str, FieldSpec] = {}
        self._built = False

    def _check_open(self):
        if self._built:
            raise SchemaDefinitionError(f"Schema {self.resource_type} has already been built")

    def key_format(self, func) -> "SchemaBuilder":
        """
        :param func: function or KeyTransform applied to all output keys
        """
        self._check_open()
        self._key_format = func if isinstance(func, KeyTransform) else KeyTransform(func)
        return self

    def _add(self, specs: Dict[str, FieldSpec], spec: FieldSpec) -> "SchemaBuilder":
        self._check_open()
        if spec.source_key in specs:
            raise SchemaDefinitionError(f'"{spec.source_key}" is registered twice for {self.resource_type}')
        specs[spec.source_key] = spec
        jsonapi_flask.log.debug(f"Registered {spec} for {self.resource_type}")
        return self

    def register(self, source_key: str, rename: Optional[str] = None, transform: Optional[Transform] = None) -> "SchemaBuilder":
        return self._add(self._fields, FieldSpec(source_key, rename, transform))

    def register_relationship(self, source_key: str, rename: Optional[str] = None, transform: Optional[Transform] = None) -> "SchemaBuilder":
        return self._add(self._relationships, FieldSpec(source_key, rename, transform, relationship=True))

    def attribute(self, source_key: str, rename: Optional[str] = None):
        """
        Decorator, registers the decorated function as the transform of `source_key`
        """

        def decorator(func):
            self.register(source_key, rename, func)
            return func

        return decorator

    def relationship(self, source_key: str, rename: Optional[str] = None):
        """
        Decorator, registers the decorated function as the transform of the `source_key` relationship linkage
        """

        def decorator(func):
            self.register_relationship(source_key, rename, func)
            return func

        return decorator

    def build(self) -> ResourceSchema:
        self._check_open()
        self._built = True
        return ResourceSchema(
            self.resource_type,
            self._key_format,
            MappingProxyType(dict(self._fields)),
            MappingProxyType(dict(self._relationships)),
        )


DEFAULT_SCHEMA = ResourceSchema()


class SchemaRegistry:
    """
    Explicit mapping of resource names (eg. "user") to schemas.
    The registry is filled when the routes are set up and frozen before the first request is handled
    """

    def __init__(self) -> None:
        self._schemas: Dict[str, ResourceSchema] = {}
        self.frozen = False

    def register(self, name: str, schema: ResourceSchema) -> ResourceSchema:
        if self.frozen:
            raise SchemaDefinitionError(f'Can\'t register "{name}": the schema registry is frozen')
        if not isinstance(schema, ResourceSchema):
            raise SchemaDefinitionError(f'Invalid schema for "{name}": {schema}')
        self._schemas[name] = schema
        return schema

    def get(self, name: str) -> ResourceSchema:
        return self._schemas.get(name, DEFAULT_SCHEMA)

    def freeze(self) -> None:
        self.frozen = True

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
