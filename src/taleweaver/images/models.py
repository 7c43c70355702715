from pydantic import BaseModel, ConfigDict, Field


class ImageURLs(BaseModel):
    """Links to one image at the sizes a search provider offers."""

    model_config = ConfigDict(frozen=True)

    raw: str | None = None
    full: str | None = None
    regular: str | None = Field(default=None, description="Display-size link used for illustrations")
    small: str | None = None
    thumb: str | None = None


class ImageResult(BaseModel):
    """A single image search hit."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Provider-specific image identifier")
    description: str | None = Field(default=None, description="Caption or alt text")
    urls: ImageURLs = Field(description="Image links by size")
    author: str | None = Field(default=None, description="Photographer or uploader name")


class ImageSearchResponse(BaseModel):
    """Image search response with results in provider ranking order."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(description="Query sent to the provider")
    results: list[ImageResult] = Field(default_factory=list, description="Search results")
    total: int = Field(default=0, description="Total matches reported by the provider")

    @property
    def first_regular_url(self) -> str | None:
        """Regular-size link of the top result, if there is one."""
        if not self.results:
            return None
        return self.results[0].urls.regular
