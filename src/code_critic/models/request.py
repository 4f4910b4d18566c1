from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoastRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Unknown input types are reviewed as pasted code.
    input_type: str = "code"
    code: str | None = None
    language: str | None = None
    github_url: str | None = None
    roast_level: str = Field(default="medium", alias="roastLevel")

    @field_validator("input_type", "roast_level", mode="before")
    @classmethod
    def null_as_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value
