from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..._internal.diagnostics import (
    DiagnosticEvent,
    Observer,
    log_observer,
    FIELD_LOOKUP_HIT,
    FIELD_LOOKUP_MISS,
)


class WireModel(BaseModel):
    """
    Base of the wire types. The server is not consistent about the case of
    member names (responses are usually camelCase, e.g. "itemValue", while the
    documented names are PascalCase), so input keys are matched against the
    wire names case-insensitively. Members that are null take the field
    default. Output always uses the PascalCase wire names.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_members(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        names = {}
        for name in cls.model_fields:
            names[name.lower()] = name
        for name, info in cls.model_fields.items():
            if info.alias:
                names[info.alias.lower()] = info.alias
        normalized = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(key, str):
                key = names.get(key.lower(), key)
            normalized[key] = value
        return normalized


class SshKeyArgs(WireModel):
    """
    Key generation arguments. Only meaningful when creating a secret from a
    template with extended mappings for ssh keys, in which case the server
    generates the key pair and / or the passphrase.
    """

    generate_ssh_keys: bool = Field(default=False, alias="GenerateSshKeys")
    generate_passphrase: bool = Field(default=False, alias="GeneratePassphrase")


class SecretField(WireModel):
    """
    An item (field) in a secret. File-backed fields carry a non-zero
    file_attachment_id, and their item_value as returned by the server is a
    placeholder until the attachment content is fetched.
    """

    item_id: int = Field(default=0, alias="ItemId")
    field_id: int = Field(default=0, alias="FieldId")
    file_attachment_id: int = Field(default=0, alias="FileAttachmentId")
    field_description: str = Field(default="", alias="FieldDescription")
    field_name: str = Field(default="", alias="FieldName")
    filename: str = Field(default="", alias="Filename")
    item_value: str = Field(default="", alias="ItemValue")
    slug: str = Field(default="", alias="Slug")
    is_file: bool = Field(default=False, alias="IsFile")
    is_notes: bool = Field(default=False, alias="IsNotes")
    is_password: bool = Field(default=False, alias="IsPassword")

    @property
    def is_file_backed(self) -> bool:
        return self.file_attachment_id != 0


class Secret(WireModel):
    """
    A secret as stored on the Secret Server, corresponding to the secrets
    resource of the REST api. The wire names (Id, FolderId, Items, ...) are kept
    as aliases, so `Secret(**response_json)` and
    `secret.model_dump(by_alias=True, exclude_none=True)` both speak the
    server's format.
    """

    id_: int = Field(default=0, alias="Id")
    name: str = Field(default="", alias="Name")
    folder_id: int = Field(default=0, alias="FolderId")
    site_id: int = Field(default=0, alias="SiteId")
    secret_template_id: int = Field(default=0, alias="SecretTemplateId")
    secret_policy_id: int = Field(default=0, alias="SecretPolicyId")
    active: bool = Field(default=False, alias="Active")
    checked_out: bool = Field(default=False, alias="CheckedOut")
    check_out_enabled: bool = Field(default=False, alias="CheckOutEnabled")
    fields: List[SecretField] = Field(default_factory=list, alias="Items")
    ssh_key_args: Optional[SshKeyArgs] = Field(default=None, alias="SshKeyArgs")

    @model_validator(mode="after")
    def check_unique_item_ids(self) -> "Secret":
        # item id 0 marks a field that the server has not stored yet
        seen = set()
        for f in self.fields:
            if f.item_id and f.item_id in seen:
                raise ValueError(
                    f"duplicate item id {f.item_id} in secret {self.id_}"
                )
            seen.add(f.item_id)
        return self

    def field(
        self, name: str, observer: Observer = log_observer
    ) -> Tuple[str, bool]:
        """
        Returns the value of the first field whose name or slug is `name`, and
        whether such a field exists. A miss returns ("", False).
        """
        for f in self.fields:
            if name == f.field_name or name == f.slug:
                observer(
                    DiagnosticEvent(
                        FIELD_LOOKUP_HIT,
                        f"field with name '{f.field_name}' matches '{name}'",
                        {"secret_id": self.id_, "item_id": f.item_id},
                    )
                )
                return f.item_value, True
        observer(
            DiagnosticEvent(
                FIELD_LOOKUP_MISS,
                f"no matching field for name '{name}' in secret '{self.name}'",
                {"secret_id": self.id_, "name": name},
            )
        )
        return "", False

    def field_by_id(
        self, field_id: int, observer: Observer = log_observer
    ) -> Tuple[str, bool]:
        """
        Returns the value of the first field with the given template field id,
        and whether such a field exists.
        """
        f = self.get_field(field_id)
        if f is None:
            observer(
                DiagnosticEvent(
                    FIELD_LOOKUP_MISS,
                    f"no matching field for id {field_id} in secret '{self.name}'",
                    {"secret_id": self.id_, "field_id": field_id},
                )
            )
            return "", False
        observer(
            DiagnosticEvent(
                FIELD_LOOKUP_HIT,
                f"field with id {field_id} matches '{f.field_name}'",
                {"secret_id": self.id_, "item_id": f.item_id},
            )
        )
        return f.item_value, True

    def get_field(self, field_id: int) -> Optional[SecretField]:
        for f in self.fields:
            if f.field_id == field_id:
                return f
        return None
