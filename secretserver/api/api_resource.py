from pydantic import BaseModel
from requests import Response
from typing import TYPE_CHECKING, Dict, Union, List, Any, TypeVar

if TYPE_CHECKING:
    # only used for type hinting, but avoids circular imports
    from .client import APIClient


class TransportError(RuntimeError):
    """
    The server answered a resource request with a non-success status.
    """

    def __init__(self, response: Response, kind: str = "Transport"):
        super().__init__(
            f"{kind} error during API call to {response.url}:"
            f" {response.status_code} {response.text}"
        )
        self.response = response
        self.status_code = response.status_code
        self.text = response.text


class ClientError(TransportError):
    def __init__(self, response: Response):
        super().__init__(response, "Client")


class NotFoundError(ClientError):
    """
    The requested resource does not exist, e.g. a secret that was deleted.
    """


class ServerError(TransportError):
    def __init__(self, response: Response):
        super().__init__(response, "Server")


def raise_if_not_ok(response: Response) -> Response:
    """
    Raise a TransportError subclass if the response is not ok.
    """
    if response.status_code == 404:
        raise NotFoundError(response)
    elif response.status_code >= 400 and response.status_code < 500:
        raise ClientError(response)
    elif response.status_code >= 500:
        raise ServerError(response)
    return response


class APIResource(object):
    """
    APIResource is a base class for all api implementations. It is registered
    with the APIClient object and provides a set of utility functions to
    interact with the API. For example, for all secret related operations,
    the SecretAPI class is used which is a subclass of APIResource.

    The only thing an APIResource needs from the client is the access
    primitive `access(method, resource, path, body) -> bytes`, so any object
    exposing such a method can stand in for the APIClient.
    """

    _client: "APIClient"

    def __init__(self, _client: "APIClient"):
        """
        Initializes the APIResource with the APIClient object. You should not
        need to explicitly call this method. All APIResource classes should
        be initialized in the APIClient class's __init__ function.
        """
        self._client = _client
        self._access = _client.access

    # A type variable to represent a subclass of BaseModel
    T = TypeVar("T", bound=BaseModel)

    def safe_json(
        self, content: Union[T, List[T]]
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        A utility function to safely convert BaseModel or a list of BaseModel to
        JSON serializable dictionary or list of dictionary. This also honors the alias
        defined in the BaseModel.

        Args:
            content (Union[T, List[T]]): BaseModel or List[BaseModel]
        Returns:
            Union[Dict[str, Any], List[Dict[str, Any]]]: JSON serializable dictionary
            or list of dictionary
        Raises:
            ValueError: If the input is not BaseModel or List[BaseModel]
        """
        if isinstance(content, BaseModel):
            return content.model_dump(exclude_none=True, by_alias=True)
        elif isinstance(content, list) and all(
            isinstance(c, BaseModel) for c in content
        ):
            return [c.model_dump(exclude_none=True, by_alias=True) for c in content]
        else:
            raise ValueError(
                "safe_json only accepts BaseModel or List[BaseModel] as input."
            )
