"""Document number sequence entity."""

from pydantic import BaseModel, Field

from src.core.entities.common import Region


class DocumentSequence(BaseModel):
    """One row per region. ``current_number`` only ever increases."""

    id: int | None = None
    region: Region
    prefix: str
    current_number: int = Field(default=0, ge=0)

    @staticmethod
    def format_number(prefix: str, number: int, padding: int = 4) -> str:
        """Render ``prefix`` + zero-padded ``number``."""
        return f"{prefix}{number:0{padding}d}"

    def current(self, padding: int = 4) -> str:
        """Formatted form of the last issued number."""
        return self.format_number(self.prefix, self.current_number, padding)

    def preview_next(self, padding: int = 4) -> str:
        """Formatted form of the number the next issue would return."""
        return self.format_number(self.prefix, self.current_number + 1, padding)
