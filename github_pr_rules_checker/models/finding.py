"""Review finding models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FindingKind(str, Enum):
    """Kind of review feedback."""

    WARNING = "warning"
    INFO = "info"


class Finding(BaseModel):
    """One advisory message produced by a rule check.

    ``text`` is either plain text or rendered Markdown (for example a table).
    """

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    text: str

    @classmethod
    def warning(cls, text: str) -> "Finding":
        return cls(kind=FindingKind.WARNING, text=text)

    @classmethod
    def info(cls, text: str) -> "Finding":
        return cls(kind=FindingKind.INFO, text=text)

    @property
    def is_warning(self) -> bool:
        return self.kind == FindingKind.WARNING
