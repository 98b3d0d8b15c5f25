"""Response schemas shared by every pricing router."""

from pydantic import BaseModel

from src.bb_persistence.domain.backend import SaveResult, SyncResult


class SaveResultResponse(BaseModel):
    success: bool
    source: str
    message: str
    warning_code: int | None = None

    @classmethod
    def from_result(cls, result: SaveResult) -> "SaveResultResponse":
        return cls(
            success=result.success,
            source=result.source.value,
            message=result.message,
            warning_code=result.warning.code if result.warning else None,
        )


class SyncResultResponse(BaseModel):
    success: bool
    message: str

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResultResponse":
        return cls(success=result.success, message=result.message)
