# JSON:API document encoding

import datetime
import decimal
import json
from uuid import UUID
from flask.json.provider import DefaultJSONProvider
import jsonapi_flask
from .config import is_debug
from .errors import JsonapiError
from .pointer import PointerPath
from .request import MEDIA_TYPE


class _JSONAPIEncoder:
    """
    JSON encoding for the values found in rendered documents (pointers, errors and common types)
    """

    # pylint: disable=too-many-return-statements
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if obj is None:
            return None
        if isinstance(obj, PointerPath):
            return str(obj)
        if isinstance(obj, JsonapiError):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            jsonapi_flask.log.debug("JSONAPIEncoder: serializing bytes obj")
            return obj.hex()

        # Getting here means a serializer returned a value we don't know about
        jsonapi_flask.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        if is_debug():
            return str(obj)
        return {"error": "JSONAPIEncoder invalid object"}


class JSONAPIJSONProvider(_JSONAPIEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding
    """

    mimetype = MEDIA_TYPE


class JSONAPIJSONEncoder(_JSONAPIEncoder, json.JSONEncoder):
    """
    Common JSON encoding, for use outside of an application context
    """

    pass
