## Base LLM Client Interface
from abc import ABC, abstractmethod


class LLMError(RuntimeError):
    """Provider call failed (network, HTTP status, empty completion)."""


class LLMClient(ABC):
    @abstractmethod
    def generate_text(self, * , system: str, user: str, temperature: float = 0.2) -> str:
        """
        Return the raw completion text for one system/user exchange.
        Structured output is parsed and validated by the caller
        (see app.agents.workflow.generate_validated).
        """
        raise NotImplementedError
