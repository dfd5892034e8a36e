"""Custom exceptions for reviewcover."""


class ReviewCoverError(Exception):
    """Base exception for all reviewcover errors."""


class ConfigError(ReviewCoverError):
    """Configuration-related errors."""


class GitError(ReviewCoverError):
    """Raised when git cannot be run or a diff base cannot be resolved."""
