"""
Error taxonomy for vindu.

Every failure is terminal for its request and maps to one HTTP status.
"""


class VinduError(Exception):
    """Base error carrying the HTTP status and the text sent to the client."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class QueryConstructionError(VinduError):
    """The outbound describe request could not be built."""
    status_code = 400


class UpstreamError(VinduError):
    """The SPARQL endpoint could not be reached or answered with an error."""
    status_code = 500


class DecodeError(VinduError):
    """The store's response is not valid RDF in the requested format."""
    status_code = 500


class ResourceNotFound(VinduError):
    """The describe query returned no triples."""
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)
