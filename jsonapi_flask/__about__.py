__version__ = "0.3.0"
__description__ = "jsonapi-flask : JSON:API request deserialization and rendering for Flask"
