from typing import Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    topic: Optional[str] = Field(
        default=None,
        description="What the generated website should be about.",
        examples=["A bakery in Lisbon"],
    )
    prompt: Optional[str] = Field(
        default=None,
        description="Alias for ``topic``; used only when ``topic`` is blank.",
    )

    @property
    def resolved_topic(self) -> Optional[str]:
        """First non-blank of ``topic`` and ``prompt``, stripped."""
        for value in (self.topic, self.prompt):
            if value and value.strip():
                return value.strip()
        return None
