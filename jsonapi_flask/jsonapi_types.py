from typing import Any, Dict, List, TypedDict


class JSONAPIResourceIdentifier(TypedDict):
    id: str
    type: str


class JSONAPIResourceObject(JSONAPIResourceIdentifier, total=False):
    attributes: Dict[str, Any]
    relationships: Dict[str, Any]
    meta: Dict[str, Any]
    links: Dict[str, Any]


class JSONAPIErrorSource(TypedDict, total=False):
    pointer: str
    parameter: str


class JSONAPIErrorObject(TypedDict, total=False):
    id: str
    status: str
    code: str
    title: str
    detail: str
    source: JSONAPIErrorSource
    meta: Dict[str, Any]


class JSONAPIResponseDocument(TypedDict, total=False):
    data: Any
    meta: Dict[str, Any]
    errors: List[JSONAPIErrorObject]
    links: Dict[str, Any]
    jsonapi: Dict[str, str]
