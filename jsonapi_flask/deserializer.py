#
# Deserialization of JSON:API request documents
#
# The primary data of the document is flattened into a dict of attributes, for example
#   {"data": {"type": "users", "id": "1", "attributes": {"name": "Lucas"}}}
# becomes
#   {"type": "users", "id": "1", "name": "Lucas"}
# For every output key we keep a JSON Pointer to the location of the input value:
#   {"type": "/data/type", "id": "/data/id", "name": "/data/attributes/name"}
# The pointers are used to reference the request document in error responses ("source.pointer")
#
from typing import Any, Dict, List, Optional
import jsonapi_flask
from .errors import MalformedDocumentError
from .pointer import DATA, PointerPath
from .schema import DEFAULT_SCHEMA, ResourceSchema


class DeserializationResult:
    """
    Flattened attributes and their provenance.
    `pointers` holds exactly one PointerPath per key in `attributes`
    """

    __slots__ = ("attributes", "pointers")

    def __init__(self, attributes: Optional[Dict[str, Any]] = None, pointers: Optional[Dict[str, PointerPath]] = None) -> None:
        self.attributes = attributes if attributes is not None else {}
        self.pointers = pointers if pointers is not None else {}

    def add(self, key: str, value: Any, pointer: PointerPath) -> None:
        # last write wins
        self.attributes[key] = value
        self.pointers[key] = pointer

    def pointer_strings(self) -> Dict[str, str]:
        """
        :return: output key => pointer string
        """
        return {key: str(pointer) for key, pointer in self.pointers.items()}

    def __eq__(self, other):
        if not isinstance(other, DeserializationResult):
            return NotImplemented
        return self.attributes == other.attributes and self.pointers == other.pointers

    def __repr__(self):
        return f"DeserializationResult(attributes={self.attributes!r}, pointers={self.pointer_strings()!r})"


class DeserializationEngine:
    """
    Walks the primary data of a JSON:API document and applies a ResourceSchema.
    The engine keeps no state between calls, one instance can be shared
    """

    def deserialize(self, document: Any, schema: Optional[ResourceSchema] = None, **context) -> DeserializationResult:
        """
        :param document: parsed JSON:API document
        :param schema: ResourceSchema, the default schema passes everything through
        :param context: additional keyword arguments passed to the transforms
        :return: DeserializationResult
        :raises MalformedDocumentError: if the document has no usable "data" member
        """
        data = self._get_data(document)
        if data is None:
            # deliberate "no resource" payload
            return DeserializationResult()
        if not isinstance(data, dict):
            raise MalformedDocumentError("data must be an object or null", pointer=DATA)
        return self.deserialize_resource(data, schema, DATA, context)

    def deserialize_collection(self, document: Any, schema: Optional[ResourceSchema] = None, **context) -> List[DeserializationResult]:
        """
        Deserialize a document whose primary data is an array of resource objects
        :return: one DeserializationResult per resource object, pointers start with /data/<index>
        """
        data = self._get_data(document)
        if not isinstance(data, list):
            raise MalformedDocumentError("data must be an array", pointer=DATA)
        results = []
        for index, resource in enumerate(data):
            if not isinstance(resource, dict):
                raise MalformedDocumentError("resource must be an object", pointer=DATA / index)
            results.append(self.deserialize_resource(resource, schema, DATA / index, context))
        return results

    @staticmethod
    def _get_data(document: Any) -> Any:
        if not isinstance(document, dict):
            raise MalformedDocumentError(f"Invalid JSON:API document {type(document).__name__}", pointer=PointerPath())
        if "data" not in document:
            raise MalformedDocumentError("missing data member", pointer=DATA)
        return document["data"]

    def deserialize_resource(self, data: Dict[str, Any], schema: Optional[ResourceSchema], base: PointerPath, context=None) -> DeserializationResult:
        """
        :param data: resource object
        :param schema: ResourceSchema
        :param base: pointer to the resource object
        :param context: additional keyword arguments passed to the transforms
        :return: DeserializationResult
        """
        if schema is None:
            schema = DEFAULT_SCHEMA
        attributes = self._get_member(data, "attributes", base)
        relationships = self._get_member(data, "relationships", base)

        result = DeserializationResult()
        if "type" in data:
            result.add("type", data["type"], base / "type")
        if "id" in data:
            result.add("id", data["id"], base / "id")

        for key, value in attributes.items():
            spec = schema.attribute_spec(key)
            pointer = base / "attributes" / key
            self._merge(result, spec.apply(value, schema.key_format, context), pointer)

        for key, relationship in relationships.items():
            spec = schema.relationship_spec(key)
            pointer = base / "relationships" / key / "data"
            linkage = self._get_linkage(relationship, pointer)
            self._merge(result, spec.apply(linkage, schema.key_format, context), pointer)

        return result

    @staticmethod
    def _merge(result: DeserializationResult, pairs: Dict[str, Any], pointer: PointerPath) -> None:
        if len(pairs) > 1:
            jsonapi_flask.log.debug(f"{pointer} is mapped to {list(pairs)}")
        for key, value in pairs.items():
            # all the output keys of a transform share the pointer of its input
            result.add(key, value, pointer)

    @staticmethod
    def _get_member(data: Dict[str, Any], name: str, base: PointerPath) -> Dict[str, Any]:
        member = data.get(name)
        if member is None:
            return {}
        if not isinstance(member, dict):
            raise MalformedDocumentError(f"{name} must be an object", pointer=base / name)
        return member

    @staticmethod
    def _get_linkage(relationship: Any, pointer: PointerPath) -> Any:
        """
        :return: the "data" member of the relationship, None when it is null or absent

        A relationship with only links or meta is deserialized like a null linkage, its pointer
        still references the missing "data" member, so PointerPath.resolve raises KeyError on it
        """
        if not isinstance(relationship, dict):
            raise MalformedDocumentError("relationship must be an object", pointer=pointer)
        linkage = relationship.get("data")
        if linkage is None or isinstance(linkage, dict):
            return linkage
        if isinstance(linkage, list) and all(isinstance(item, dict) for item in linkage):
            return linkage
        raise MalformedDocumentError("relationship data must be a resource identifier, an array or null", pointer=pointer)


engine = DeserializationEngine()


def deserialize(document: Any, schema: Optional[ResourceSchema] = None, **context) -> DeserializationResult:
    return engine.deserialize(document, schema, **context)


def deserialize_collection(document: Any, schema: Optional[ResourceSchema] = None, **context) -> List[DeserializationResult]:
    return engine.deserialize_collection(document, schema, **context)
