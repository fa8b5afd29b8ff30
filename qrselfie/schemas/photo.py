from pydantic import BaseModel, ConfigDict, Field


class PhotoRecord(BaseModel):
    """One manifest entry. Persisted as ``{filename, createdAt}`` under its id."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    filename: str
    created_at: int = Field(alias="createdAt")

    def to_manifest(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"id"})


class UploadOut(BaseModel):
    id: str
    viewUrl: str


class MetaOut(BaseModel):
    id: str
    imageUrl: str
    viewUrl: str


class ErrorOut(BaseModel):
    error: str
