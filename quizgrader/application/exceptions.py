class InputValidationError(ValueError):
    """Raised when the submitted answers are missing, empty or malformed."""
    pass


class UnsupportedOperationError(RuntimeError):
    """Raised when the evaluate endpoint is called with anything but a submit."""
    pass


class ReferenceAnswerError(RuntimeError):
    """Raised when a reference answer cannot be obtained for a single item."""
    pass


class LLMUpstreamError(ReferenceAnswerError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(ReferenceAnswerError):
    """Raised when LLM adapter violates contract (empty completion or malformed payload)."""
    pass
