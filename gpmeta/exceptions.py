# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for gpmeta

Header parsing itself never raises to the caller; these exceptions are
used internally between stages and by the file-level API.

Copyright 2025 DNAi inc.
"""


class GPMetaError(Exception):
    """
    Base exception for all gpmeta errors.

    All gpmeta exceptions inherit from this class, allowing
    catch-all error handling for any gpmeta-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(GPMetaError):
    """
    Raised when a Guitar Pro file cannot be read.

    This exception is raised when:
    - The file path does not exist or cannot be opened
    - The file is empty
    """
    pass


class ContainerCorruptError(MetadataReadError):
    """
    Raised when a compressed container cannot be inflated.

    Both the raw deflate and the zlib-wrapped attempts failed, so there
    is nothing left to salvage from the container.
    """
    pass
