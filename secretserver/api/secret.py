"""
Secret resolution, decoding and attachment hydration for the secrets resource.

A secret is addressed either by its numeric id or by its folder path and name,
e.g. "/Personal Folders/Test Secret". Retrieval is a two phase protocol: the
secret itself is fetched and decoded, then the content of every file-backed
field is fetched from its own sub-resource and substituted for the placeholder
value the server returns in the secret body.
"""

import json
from dataclasses import dataclass
from typing import Union
from urllib.parse import quote_plus

from pydantic import ValidationError

from .._internal.diagnostics import (
    DiagnosticEvent,
    Observer,
    log_observer,
    ATTACHMENT_FETCH,
    DECODE_FAILURE,
)
from .api_resource import APIResource
from .types.secret import Secret

# the HTTP URL path component for the secrets resource
RESOURCE = "secrets"


class InvalidReference(TypeError):
    """
    The secret reference is neither a numeric id nor a secret path.
    """


class DecodeError(ValueError):
    """
    The server response could not be decoded as a secret. The raw response is
    kept in `payload` and the requested resource path in `source`.
    """

    def __init__(self, message: str, payload: bytes, source: str):
        super().__init__(message)
        self.payload = payload
        self.source = source


class SecretReference(object):
    """
    Base class of the two ways to address a secret, ByID and ByPath.
    """

    def resolve(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ByID(SecretReference):
    id_: int

    def __post_init__(self):
        if isinstance(self.id_, bool) or not isinstance(self.id_, int):
            raise InvalidReference(f"Secret id must be an integer, got {self.id_!r}.")

    def resolve(self) -> str:
        return str(self.id_)


@dataclass(frozen=True)
class ByPath(SecretReference):
    path: str

    def __post_init__(self):
        if not isinstance(self.path, str) or not self.path:
            raise InvalidReference(
                f"Secret path must be a non-empty string, got {self.path!r}."
            )

    def resolve(self) -> str:
        # The server looks secrets up by path when the id is the placeholder 0.
        return "0?secretPath=" + quote_plus(self.path)


SecretLike = Union[SecretReference, int, str]


def as_reference(reference: SecretLike) -> SecretReference:
    """
    Turns an int into ByID and a str into ByPath. Anything else is an
    InvalidReference.
    """
    if isinstance(reference, SecretReference):
        return reference
    if isinstance(reference, bool):
        raise InvalidReference("A boolean is not a valid secret reference.")
    if isinstance(reference, int):
        return ByID(reference)
    if isinstance(reference, str):
        return ByPath(reference)
    raise InvalidReference(
        f"Unrecognized secret reference of type {type(reference).__name__}:"
        f" {reference!r}. Use an integer id or a secret path string."
    )


def resolve(reference: SecretLike) -> str:
    """
    Returns the identifier path of the secret below the secrets resource.
    """
    return as_reference(reference).resolve()


def decode_secret(
    data: bytes, source: str, observer: Observer = log_observer
) -> Secret:
    """
    Decodes a secret from the raw response of `source`.

    :raises DecodeError: if data is not a JSON object describing a secret
    """
    try:
        obj = json.loads(data)
        if not isinstance(obj, dict):
            raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
        return Secret.model_validate(obj)
    except (ValueError, ValidationError) as e:
        observer(
            DiagnosticEvent(
                DECODE_FAILURE,
                f"error parsing response from /{source}: {data!r}",
                {"source": source, "payload": data},
            )
        )
        raise DecodeError(
            f"Cannot decode the response from /{source} as a secret: {e}",
            payload=data,
            source=source,
        ) from e


class SecretAPI(APIResource):
    def __init__(self, _client, observer: Observer = log_observer):
        super().__init__(_client)
        self._observer = observer

    def get(self, reference: SecretLike) -> Secret:
        """
        Gets a secret by id (int), by path (str) or by an explicit ByID / ByPath
        reference. File attachments are fetched and substituted for the field
        values, so the returned secret carries the actual file content.
        """
        identifier = resolve(reference)
        data = self._access("GET", RESOURCE, identifier, None)
        secret = decode_secret(data, f"{RESOURCE}/{identifier}", self._observer)
        return self._hydrate(secret)

    def get_by_id(self, id_: int) -> Secret:
        return self.get(ByID(id_))

    def get_by_path(self, path: str) -> Secret:
        """
        Gets the secret at the given path. A secret path is the fully qualified
        folder path followed by the secret name, and begins with a leading slash.
        """
        return self.get(ByPath(path))

    def create(self, secret: Secret) -> Secret:
        """
        Creates the secret and returns the server's representation of it, with
        the assigned id and any generated values (keys, passphrases, filenames).
        """
        data = self._access("POST", RESOURCE, None, self.safe_json(secret))
        created = decode_secret(data, RESOURCE, self._observer)
        return self._hydrate(created)

    def update(self, secret: Secret) -> Secret:
        """
        Replaces the secret with the same id on the server. This is a full
        replacement: fields left out of `secret` are cleared.
        """
        if secret.id_ <= 0:
            raise InvalidReference(
                f"Cannot update a secret without an id (got {secret.id_})."
            )
        identifier = ByID(secret.id_).resolve()
        data = self._access("PUT", RESOURCE, identifier, self.safe_json(secret))
        updated = decode_secret(data, f"{RESOURCE}/{identifier}", self._observer)
        return self._hydrate(updated)

    def delete(self, id_: int) -> bool:
        """
        Deletes the secret. Deleting a secret that does not exist raises.
        """
        self._access("DELETE", RESOURCE, ByID(id_).resolve(), None)
        return True

    def _hydrate(self, secret: Secret) -> Secret:
        """
        Returns a copy of the secret where every file-backed field carries the
        content of its attachment. Attachments are fetched one at a time in field
        order, and any failure propagates without returning a partial secret.
        """
        fields = []
        for field in secret.fields:
            if field.is_file_backed:
                path = f"{secret.id_}/fields/{field.slug}"
                self._observer(
                    DiagnosticEvent(
                        ATTACHMENT_FETCH,
                        f"fetching attachment of field '{field.slug}' from"
                        f" /{RESOURCE}/{path}",
                        {"secret_id": secret.id_, "slug": field.slug},
                    )
                )
                data = self._access("GET", RESOURCE, path, None)
                field = field.model_copy(
                    update={"item_value": data.decode("utf-8", errors="replace")}
                )
            fields.append(field)
        return secret.model_copy(update={"fields": fields})
