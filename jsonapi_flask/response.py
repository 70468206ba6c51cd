# Response class
from flask import Response
from .request import MEDIA_TYPE


class JSONAPIResponse(Response):
    """
    Response class
    """

    @classmethod
    def from_document(cls, body: str, status: int = 200, headers=None) -> "JSONAPIResponse":
        """
        :param body: serialized JSON:API document
        :param status: HTTP status code
        :return: response with the JSON:API content type
        """
        return cls(body, status=status, headers=headers, mimetype=MEDIA_TYPE)
