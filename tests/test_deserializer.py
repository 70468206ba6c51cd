import copy

import pytest

from jsonapi_flask.deserializer import DeserializationEngine, DeserializationResult, deserialize, deserialize_collection
from jsonapi_flask.errors import MalformedDocumentError, SchemaDefinitionError
from jsonapi_flask.pointer import PointerPath
from jsonapi_flask.schema import KeyTransform, ResourceSchema

PAYLOAD = {"data": {"type": "users", "attributes": {"name": "Lucas"}}}

ARTICLE = {
    "data": {
        "type": "articles",
        "id": "1",
        "attributes": {"title": "JSON:API paints my bikeshed!", "publishedAt": "2015-05-22"},
        "relationships": {
            "author": {"data": {"type": "people", "id": "9"}},
            "comments": {"data": [{"type": "comments", "id": "5"}, {"type": "comments", "id": "12"}]},
            "editor": {"data": None},
        },
    }
}


def pointers(result: DeserializationResult) -> dict:
    return result.pointer_strings()


def test_null_data_gives_empty_result() -> None:
    result = deserialize({"data": None})

    assert result.attributes == {}
    assert result.pointers == {}


def test_default_schema() -> None:
    result = deserialize(PAYLOAD)

    assert result.attributes == {"type": "users", "name": "Lucas"}
    assert pointers(result) == {"type": "/data/type", "name": "/data/attributes/name"}


def test_transform_output_keeps_input_pointer() -> None:
    schema = ResourceSchema.define("users", lambda s: s.register("name", transform=lambda v: {"first_name": v}))

    result = deserialize(PAYLOAD, schema)

    assert result.attributes == {"type": "users", "first_name": "Lucas"}
    assert pointers(result) == {"type": "/data/type", "first_name": "/data/attributes/name"}


def test_key_format_is_applied_to_attributes_only() -> None:
    schema = ResourceSchema.define("users", key_format=str.capitalize)

    result = deserialize(PAYLOAD, schema)

    assert result.attributes == {"type": "users", "Name": "Lucas"}
    assert pointers(result) == {"type": "/data/type", "Name": "/data/attributes/name"}


def test_rename_applies_key_format() -> None:
    schema = ResourceSchema.define("users", lambda s: s.register("name", rename="fullName"), key_format=KeyTransform.underscore())

    result = deserialize(PAYLOAD, schema)

    assert result.attributes == {"type": "users", "full_name": "Lucas"}
    assert pointers(result) == {"type": "/data/type", "full_name": "/data/attributes/name"}


def test_fan_out_shares_one_pointer() -> None:
    def split_name(value):
        first, _, last = value.partition(" ")
        return {"first_name": first, "last_name": last}

    schema = ResourceSchema.define("users", lambda s: s.register("name", transform=split_name))
    document = {"data": {"type": "users", "id": "3", "attributes": {"name": "Lucas Hosseini", "age": 30}}}

    result = deserialize(document, schema)

    assert result.attributes == {"type": "users", "id": "3", "first_name": "Lucas", "last_name": "Hosseini", "age": 30}
    assert pointers(result) == {
        "type": "/data/type",
        "id": "/data/id",
        "first_name": "/data/attributes/name",
        "last_name": "/data/attributes/name",
        "age": "/data/attributes/age",
    }


def test_relationships() -> None:
    result = deserialize(ARTICLE, ResourceSchema.define("articles", key_format=KeyTransform.underscore()))

    assert result.attributes == {
        "type": "articles",
        "id": "1",
        "title": "JSON:API paints my bikeshed!",
        "published_at": "2015-05-22",
        "author_id": "9",
        "author_type": "people",
        "comment_ids": ["5", "12"],
        "comment_types": ["comments", "comments"],
        "editor_id": None,
        "editor_type": None,
    }
    assert pointers(result)["author_id"] == "/data/relationships/author/data"
    assert pointers(result)["comment_types"] == "/data/relationships/comments/data"
    assert pointers(result)["published_at"] == "/data/attributes/publishedAt"


def test_declared_relationships() -> None:
    def configure(schema):
        schema.register_relationship("author", rename="writer")

        @schema.relationship("comments")
        def comment_ids(linkage):
            return {"comment_ids": [int(item["id"]) for item in linkage]}

    result = deserialize(ARTICLE, ResourceSchema.define("articles", configure))

    assert result.attributes["writer_id"] == "9"
    assert result.attributes["comment_ids"] == [5, 12]
    assert "comment_types" not in result.attributes
    assert pointers(result)["comment_ids"] == "/data/relationships/comments/data"
    assert pointers(result)["writer_type"] == "/data/relationships/author/data"


def test_renamed_attribute_with_transform() -> None:
    def configure(schema):
        @schema.attribute("name", rename="full_name")
        def upper(value, key):
            return {key: value.upper()}

    result = deserialize(PAYLOAD, ResourceSchema.define("users", configure))

    assert result.attributes == {"type": "users", "full_name": "LUCAS"}
    assert pointers(result)["full_name"] == "/data/attributes/name"


def test_relationship_without_data_member() -> None:
    document = {"data": {"type": "articles", "relationships": {"author": {"links": {"related": "/articles/1/author"}}}}}

    result = deserialize(document)

    assert result.attributes == {"type": "articles", "author_id": None, "author_type": None}
    assert str(result.pointers["author_id"]) == "/data/relationships/author/data"
    with pytest.raises(KeyError):
        result.pointers["author_id"].resolve(document)


@pytest.mark.parametrize("document", [PAYLOAD, ARTICLE, {"data": None}, {"data": {"type": "users"}}])
def test_pointer_keys_match_attribute_keys(document: dict) -> None:
    result = deserialize(document)

    assert result.pointers.keys() == result.attributes.keys()
    for key, pointer in result.pointers.items():
        assert isinstance(pointer, PointerPath)
        assert str(pointer).startswith("/data/")


def test_deserialize_is_idempotent() -> None:
    schema = ResourceSchema.define("articles", key_format=KeyTransform.underscore())
    document = copy.deepcopy(ARTICLE)
    engine = DeserializationEngine()

    first = engine.deserialize(document, schema)
    second = engine.deserialize(document, schema)

    assert first == second
    assert first.attributes is not second.attributes
    assert document == ARTICLE


def test_transform_context() -> None:
    schema = ResourceSchema.define("users", lambda s: s.register("name", transform=lambda v, prefix: {"name": prefix + v}))

    result = deserialize(PAYLOAD, schema, prefix="Mr. ")

    assert result.attributes["name"] == "Mr. Lucas"


def test_unknown_members_and_missing_attributes() -> None:
    document = {"data": {"type": "users", "id": "1", "meta": {"x": 1}, "links": {"self": "/users/1"}}, "meta": {}}

    result = deserialize(document, ResourceSchema.define("users", lambda s: s.register("email", rename="mail")))

    assert result.attributes == {"type": "users", "id": "1"}


def test_collision_last_write_wins() -> None:
    schema = ResourceSchema.define("users", lambda s: s.register("nick", rename="name"))
    document = {"data": {"type": "users", "attributes": {"name": "Lucas", "nick": "beauby"}}}

    result = deserialize(document, schema)

    assert result.attributes["name"] == "beauby"
    assert pointers(result)["name"] == "/data/attributes/nick"


@pytest.mark.parametrize(
    "document, pointer",
    [
        ({}, "/data"),
        ({"meta": {}}, "/data"),
        ([], ""),
        ({"data": "users"}, "/data"),
        ({"data": [{"type": "users"}]}, "/data"),
        ({"data": {"type": "users", "attributes": []}}, "/data/attributes"),
        ({"data": {"type": "users", "relationships": {"author": {"data": "9"}}}}, "/data/relationships/author/data"),
    ],
)
def test_malformed_documents(document, pointer: str) -> None:
    result = None
    with pytest.raises(MalformedDocumentError) as exc_info:
        result = deserialize(document)

    assert result is None
    assert str(exc_info.value.pointer) == pointer
    assert exc_info.value.status_code == 400


def test_invalid_transform_aborts() -> None:
    schema = ResourceSchema.define("users", lambda s: s.register("name", transform=lambda v: [v]))

    with pytest.raises(SchemaDefinitionError):
        deserialize(PAYLOAD, schema)


def test_deserialize_collection() -> None:
    document = {"data": [{"type": "users", "attributes": {"name": "Lucas"}}, {"type": "users", "id": "2", "attributes": {"name": "Thomas"}}]}

    results = deserialize_collection(document)

    assert [r.attributes for r in results] == [{"type": "users", "name": "Lucas"}, {"type": "users", "id": "2", "name": "Thomas"}]
    assert pointers(results[1]) == {"type": "/data/1/type", "id": "/data/1/id", "name": "/data/1/attributes/name"}


def test_deserialize_collection_requires_array() -> None:
    with pytest.raises(MalformedDocumentError):
        deserialize_collection(PAYLOAD)
    with pytest.raises(MalformedDocumentError) as exc_info:
        deserialize_collection({"data": [{"type": "users"}, None]})
    assert str(exc_info.value.pointer) == "/data/1"
