from pydantic import BaseModel


class GeneratedSite(BaseModel):
    """A generated single-page website split into its three source files."""

    html: str
    css: str
    js: str
