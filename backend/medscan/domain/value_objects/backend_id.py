"""
Backend Identifier Value Object

Names one recognition backend as "<provider>:<model>".
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BackendId:
    """
    Immutable identifier for a recognition backend.

    Priority is not part of the identifier; it comes from the position of the
    id in the fallback order.

    Attributes:
        provider: Adapter family (openai, groq, ollama, static)
        model: Model name understood by that provider
    """

    provider: str
    model: str

    def __post_init__(self) -> None:
        if not self.provider or not self.provider.strip():
            raise ValueError("BackendId provider cannot be empty")
        if not self.model or not self.model.strip():
            raise ValueError("BackendId model cannot be empty")

    def __str__(self) -> str:
        return f"{self.provider}:{self.model}"

    @classmethod
    def parse(cls, value: str) -> "BackendId":
        """
        Parse "<provider>:<model>".

        Only the first colon separates the provider, so Ollama tags such as
        "ollama:llava:13b" keep their model tag.
        """
        provider, sep, model = value.strip().partition(":")
        if not sep:
            raise ValueError(f"Backend id must look like 'provider:model', got '{value}'")
        return cls(provider=provider.strip().lower(), model=model.strip())
