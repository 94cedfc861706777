"""
Data models for the AllSign connector.

Items, binary attachments and result records are request-scoped; the
pydantic records validate the nested lists (signers, participants,
signature fields) before a request body is built.
"""
import base64
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ParameterError

DEFAULT_MIME_TYPE = "application/pdf"

RecordT = TypeVar("RecordT", bound=BaseModel)


class Signer(BaseModel):
    """A named party invited to sign a document."""

    name: str
    email: str


class InviteParticipant(BaseModel):
    email: str
    name: Optional[str] = None


class SignatureField(BaseModel):
    """Placement of a signature field on a PDF page."""

    model_config = ConfigDict(populate_by_name=True)

    signer_email: str = Field(alias="signerEmail")
    page_number: int = Field(default=1, alias="pageNumber")
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


def parse_records(model: Type[RecordT], values: Any, parameter: str) -> List[RecordT]:
    """
    Validate a list parameter into typed records.

    Raises:
        ParameterError: If the value is not a list or an entry is invalid
    """
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        raise ParameterError(f"Parameter '{parameter}' must be a list")
    try:
        return [model.model_validate(value) for value in values]
    except ValidationError as e:
        raise ParameterError(f"Invalid value for parameter '{parameter}': {e}") from e


def dump_records(records: Sequence[BaseModel]) -> List[Dict[str, Any]]:
    return [record.model_dump(by_alias=True, exclude_none=True) for record in records]


class BinaryData(BaseModel):
    """A named file attached to an item."""

    data: bytes
    file_name: Optional[str] = None
    mime_type: str = DEFAULT_MIME_TYPE

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "BinaryData":
        """Build from the host's JSON form: base64 "data", "fileName", "mimeType"."""
        try:
            data = base64.b64decode(payload.get("data") or "", validate=True)
        except (ValueError, TypeError) as e:
            raise ParameterError(f"Binary data is not valid base64: {e}") from e
        return cls(
            data=data,
            file_name=payload.get("fileName") or payload.get("file_name"),
            mime_type=payload.get("mimeType") or payload.get("mime_type") or DEFAULT_MIME_TYPE,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "data": base64.b64encode(self.data).decode("utf-8"),
            "fileName": self.file_name,
            "mimeType": self.mime_type,
            "fileSize": len(self.data),
        }


class Item(BaseModel):
    """One input unit: a JSON payload and optional named binary attachments."""

    json_data: Dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: Dict[str, BinaryData] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "Item":
        payload = payload or {}
        binary = {
            name: BinaryData.from_payload(value)
            for name, value in (payload.get("binary") or {}).items()
        }
        return cls(json=payload.get("json") or {}, binary=binary)


class ResultRecord(BaseModel):
    """One output record, optionally carrying a named binary attachment."""

    json_data: Dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: Optional[Dict[str, BinaryData]] = None
    paired_item: int = 0

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"json": self.json_data, "pairedItem": {"item": self.paired_item}}
        if self.binary:
            payload["binary"] = {name: data.to_payload() for name, data in self.binary.items()}
        return payload


_REQUIRED = object()


class ItemParameters:
    """Parameter values as seen while processing one item."""

    def __init__(self, values: Dict[str, Any], index: int, item: Item):
        self.values = values
        self.index = index
        self.item = item

    def get(self, name: str, default: Any = _REQUIRED) -> Any:
        """
        Look up a parameter.

        Dotted names ("signers.signerValues") match a literal key first and
        otherwise walk nested mappings.

        Raises:
            ParameterError: If the parameter is missing and has no default
        """
        if name in self.values:
            return self.values[name]

        current: Any = self.values
        for part in name.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                if default is _REQUIRED:
                    raise ParameterError(f"Could not get parameter '{name}'")
                return default
        return current

    def binary(self, property_name: str) -> BinaryData:
        data = self.item.binary.get(property_name)
        if data is None:
            raise ParameterError(f'No binary data property "{property_name}" exists on item!')
        return data


class NodeParameters:
    """
    The host's parameter bag.

    Args:
        values: Parameters shared by every item
        per_item: Optional index-aligned overrides, one dict per item
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None, per_item: Optional[List[Dict[str, Any]]] = None):
        self.values = dict(values or {})
        self.per_item = list(per_item or [])

    def for_item(self, index: int, item: Item) -> ItemParameters:
        values = dict(self.values)
        if index < len(self.per_item) and self.per_item[index]:
            values.update(self.per_item[index])
        return ItemParameters(values, index, item)
