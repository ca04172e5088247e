"""
Model Provider Interface

Every model-completion service sits behind ModelAdapter, so the audit
orchestrator and the assistant are written once against this interface.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..models import GroundingSource, ModelProvider

if TYPE_CHECKING:
    from ..audit.upload import UploadedDocument

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Token counts reported by the provider."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class CompletionRequest:
    """One structured audit call."""
    system_instruction: str
    user_message: str
    is_url: bool = False
    document: Optional["UploadedDocument"] = None


@dataclass
class ProviderResult:
    """Parsed provider reply; data is empty when the reply was not JSON."""
    data: Dict[str, Any]
    grounding_sources: List[GroundingSource] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: str = ""


@dataclass
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class ModelAdapter(ABC):
    """
    Abstract model-completion provider.

    Subclasses implement:
    - complete(): one JSON-producing audit call
    - chat(): one free-text assistant turn
    """

    provider: ModelProvider

    def __init__(self):
        # Cumulative usage across calls
        self.total_usage = TokenUsage()
        self.call_count = 0

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> ProviderResult:
        """Run one structured audit completion."""
        pass

    @abstractmethod
    async def chat(self, messages: List[ChatMessage], system: str) -> str:
        """Run one assistant turn and return the raw reply text."""
        pass

    def _track(self, usage: TokenUsage) -> None:
        self.total_usage.input_tokens += usage.input_tokens
        self.total_usage.output_tokens += usage.output_tokens
        self.call_count += 1

        logger.info(
            f"{self.provider.value} call complete: "
            f"{usage.input_tokens} in, {usage.output_tokens} out"
        )
