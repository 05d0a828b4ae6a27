from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific text-generation clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the provider's JSON-object response as plain text."""
