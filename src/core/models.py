"""
Base dos documentos persistidos no Firestore (Pydantic v2).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Registro(BaseModel):
    """O id do documento chega do banco no campo '_id'."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias='_id')

    def para_documento(self) -> dict:
        """Dicionário no formato gravado no banco (sem o id)."""
        return self.model_dump(by_alias=True, exclude={'id'})
