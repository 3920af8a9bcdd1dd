from watchdiff.normalize.cleanup import (
    DEFAULT_DROPPED_PATHS,
    CleanupNormalizer,
    CommandNormalizer,
    Normalizer,
    identity_normalizer,
    parse_dotted_path,
)

__all__ = [
    "DEFAULT_DROPPED_PATHS",
    "CleanupNormalizer",
    "CommandNormalizer",
    "Normalizer",
    "identity_normalizer",
    "parse_dotted_path",
]
