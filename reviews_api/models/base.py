"""
Base model helpers shared by every record kind.

Flexible kinds keep a typed core plus an ``extras`` side-map holding the
fields the core does not know about; ``to_document`` re-emits both.
"""

from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from reviews_api.db.base import JSONType


def plain_number(value: Any) -> Any:
    """Render integral floats as ints, so 5.0 reads back as 5."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def new_document_id() -> str:
    return str(uuid4())


class DocumentMixin:
    """
    Common columns and serialization for flexible record kinds.

    Subclasses list their core columns in ``__document_fields__`` as
    ``(wire_name, attribute_name)`` pairs.
    """

    __document_fields__ = ()

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_document_id,
    )
    extras: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, default=dict)

    def to_document(self) -> Dict[str, Any]:
        """Convert the record into its JSON document form."""
        document: Dict[str, Any] = {"_id": self.id}
        for wire_name, attribute in self.__document_fields__:
            document[wire_name] = plain_number(getattr(self, attribute))
        for key, value in (self.extras or {}).items():
            document.setdefault(key, value)
        return document

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
