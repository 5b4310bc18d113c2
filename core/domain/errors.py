class ModelParserError(Exception):
    """Model-based extraction could not produce a result."""


class ModelUnavailableError(ModelParserError):
    """The model capability is disabled or cannot be reached."""


class ModelInvocationError(ModelParserError):
    """The model was reachable but the call or its answer failed."""
