import datetime
import decimal
import json
from uuid import UUID

from flask import Flask

from jsonapi_flask import JSONAPI, JSONAPIJSONEncoder, MEDIA_TYPE
from jsonapi_flask.errors import ValidationError
from jsonapi_flask.pointer import PointerPath


def test_encoder_handles_document_values() -> None:
    value = {
        "pointer": PointerPath.parse("/data/attributes/name"),
        "created": datetime.datetime(2024, 1, 2, 3, 4, 5),
        "day": datetime.date(2024, 1, 2),
        "price": decimal.Decimal("1.5"),
        "uuid": UUID("12345678-1234-5678-1234-567812345678"),
        "tags": {"a"},
        "blob": b"\x01\x02",
    }

    assert json.loads(json.dumps(value, cls=JSONAPIJSONEncoder)) == {
        "pointer": "/data/attributes/name",
        "created": "2024-01-02 03:04:05",
        "day": "2024-01-02",
        "price": 1.5,
        "uuid": "12345678-1234-5678-1234-567812345678",
        "tags": ["a"],
        "blob": "0102",
    }


def test_encoder_renders_errors() -> None:
    encoded = json.loads(json.dumps([ValidationError("bad")], cls=JSONAPIJSONEncoder))

    assert encoded == [{"title": "Validation Error: bad", "detail": "Validation Error: bad", "status": "400"}]


def test_provider_is_installed() -> None:
    app = Flask("test_app")
    JSONAPI(app)

    with app.app_context():
        response = app.json.response({"pointer": PointerPath.parse("/data/type")})

    assert response.mimetype == MEDIA_TYPE
    assert json.loads(response.data) == {"pointer": "/data/type"}


def test_renderers_can_be_disabled() -> None:
    app = Flask("test_app")
    JSONAPI(app, JSONAPI_REGISTER_RENDERERS=False, JSONAPI_REGISTER_PARAMETER_PARSER=False)

    assert app.json.mimetype == "application/json"
    assert app.request_class.__name__ == "Request"
