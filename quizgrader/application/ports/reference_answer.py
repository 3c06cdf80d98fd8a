from abc import ABC, abstractmethod


class ReferenceAnswerPort(ABC):
    @abstractmethod
    async def get_reference_answer(self, prompt: str) -> str:
        """
        Produce a reference answer for a single prompt.

        Requirements:
        - Return the answer trimmed of surrounding whitespace
        - Never return an empty string; raise instead
        - Repeated calls with the same prompt may return different text

        Args:
            prompt: Question text followed by the user's answer, or the bare answer

        Returns:
            Non-empty reference answer

        Raises:
            LLMUpstreamError: transport or provider failure
            LLMContractError: empty or malformed completion
        """
        raise NotImplementedError
