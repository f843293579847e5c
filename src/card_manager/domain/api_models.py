"""Pydantic models for card API response payloads."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from card_manager.domain.directory import DirectoryResult, Pagination, UserRecord


class UploadResponse(BaseModel):
    """Body returned by a successful visiting card upload."""

    image_url: str = Field(alias="imageUrl")


class UserPayload(BaseModel):
    """A single user entry from ``GET /api/users``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str | None = ""
    email: str | None = ""
    website: str | None = ""
    phone: str | None = ""
    job_title: str | None = Field(default="", alias="jobTitle")
    company: str | None = ""

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            name=self.name or "",
            email=self.email or "",
            website=self.website or "",
            phone=self.phone or "",
            job_title=self.job_title or "",
            company=self.company or "",
        )


class PaginationPayload(BaseModel):
    """Pagination block from ``GET /api/users``."""

    total: int = 0
    total_pages: int = Field(default=0, alias="totalPages")
    page: int = 0


class UsersResponse(BaseModel):
    """Body returned by ``GET /api/users``."""

    data: list[UserPayload] = Field(default_factory=list)
    pagination: PaginationPayload = Field(default_factory=PaginationPayload)

    @field_validator("data", "pagination", mode="before")
    @classmethod
    def _null_as_missing(cls, value: object, info: ValidationInfo) -> object:
        """Treat an explicit null like an absent field."""
        if value is not None:
            return value
        return [] if info.field_name == "data" else {}

    def to_result(self) -> DirectoryResult:
        return DirectoryResult(
            users=[user.to_record() for user in self.data],
            pagination=Pagination(
                total=self.pagination.total,
                total_pages=self.pagination.total_pages,
                page=self.pagination.page,
            ),
        )
