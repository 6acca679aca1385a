# dupetree/core/config.py
"""
Scan configuration.

Every option is resolved with the same precedence: an explicit argument
(anything but ``None``) wins, then the matching ``DUPETREE_*`` environment
variable, then the built-in default. A value that cannot be parsed or
validated is a hard failure (``InvalidArgument``).
"""
import math
import os
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .errors import InvalidArgument
from .models import BYTES_PER_MB

SUPPORTED_ALGORITHMS = ("md5", "sha1", "sha256", "blake2b")
EXECUTOR_KINDS = ("thread", "process")

ENV_PREFIX = "DUPETREE_"
ENV_VARIABLES = {
    'size_threshold': ENV_PREFIX + "SIZE_THRESHOLD",
    'extensions': ENV_PREFIX + "EXTENSIONS",
    'n_workers': ENV_PREFIX + "N_WORKERS",
    'verbose': ENV_PREFIX + "VERBOSE",
    'algorithm': ENV_PREFIX + "ALGORITHM",
    'executor_kind': ENV_PREFIX + "EXECUTOR",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _parse_float(raw: str) -> float:
    return float(raw)


def _parse_int(raw: str) -> int:
    return int(raw)


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_extensions(raw: str) -> Optional[List[str]]:
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    return parts or None


_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    'size_threshold': _parse_float,
    'extensions': _parse_extensions,
    'n_workers': _parse_int,
    'verbose': _parse_bool,
    'algorithm': lambda raw: raw.strip().lower(),
    'executor_kind': lambda raw: raw.strip().lower(),
}


def normalize_extensions(extensions: Union[None, str, Sequence[str]]) -> Optional[List[str]]:
    """
    Normalizes an extension allow-list: lower-cased, no leading dot, no duplicates.

    ``None`` or an empty sequence means "all files". A single string is
    treated as a one-item list.
    """
    if extensions is None:
        return None
    if isinstance(extensions, str):
        extensions = [extensions]
    try:
        items = list(extensions)
    except TypeError:
        raise InvalidArgument("Extensions must be a sequence of strings", "extensions", extensions)
    if not items:
        return None

    normalized: List[str] = []
    for ext in items:
        if not isinstance(ext, str):
            raise InvalidArgument("Extensions must be strings", "extensions", extensions)
        cleaned = ext.strip().lower().lstrip(".")
        if not cleaned or "/" in cleaned or "\\" in cleaned:
            raise InvalidArgument("Malformed file extension", "extensions", ext)
        if cleaned not in normalized:
            normalized.append(cleaned)
    return normalized


@dataclass
class ScanOptions:
    size_threshold: float = 0.0 # megabytes
    extensions: Optional[List[str]] = None
    n_workers: int = 1
    verbose: bool = True
    algorithm: str = "md5"
    executor_kind: str = "thread"

    @property
    def min_size_bytes(self) -> int:
        return int(math.ceil(self.size_threshold * BYTES_PER_MB))

    def validate(self) -> "ScanOptions":
        """Checks every field, normalizing the extension list in place."""
        threshold = self.size_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidArgument("Size threshold must be a number of megabytes", "size_threshold", threshold)
        if math.isnan(threshold) or math.isinf(threshold) or threshold < 0:
            raise InvalidArgument("Size threshold must be a finite, non-negative number", "size_threshold", threshold)

        workers = self.n_workers
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise InvalidArgument("Worker count must be a positive integer", "n_workers", workers)

        if not isinstance(self.verbose, bool):
            raise InvalidArgument("Verbose must be a boolean", "verbose", self.verbose)

        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise InvalidArgument(
                f"Unsupported hash algorithm, choose one of {', '.join(SUPPORTED_ALGORITHMS)}",
                "algorithm", self.algorithm)

        if self.executor_kind not in EXECUTOR_KINDS:
            raise InvalidArgument(
                f"Unsupported executor, choose one of {', '.join(EXECUTOR_KINDS)}",
                "executor_kind", self.executor_kind)

        self.extensions = normalize_extensions(self.extensions)
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Returns the options set through ``DUPETREE_*`` variables, parsed but not validated."""
        if environ is None:
            environ = os.environ
        found: Dict[str, Any] = {}
        for name, variable in ENV_VARIABLES.items():
            raw = environ.get(variable)
            if raw is None or raw.strip() == "":
                continue
            try:
                found[name] = _ENV_PARSERS[name](raw)
            except ValueError:
                raise InvalidArgument(f"Cannot parse environment variable {variable}", name, raw)
        return found

    @classmethod
    def resolve(cls, environ: Optional[Mapping[str, str]] = None, **explicit: Any) -> "ScanOptions":
        """
        Builds validated options from explicit arguments, the environment and defaults.

        Args:
            environ: Mapping to read ``DUPETREE_*`` variables from (defaults to ``os.environ``).
            **explicit: Option values given by the caller; ``None`` means "not given".

        Returns:
            ScanOptions: A validated options object.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(explicit) - known
        if unknown:
            raise InvalidArgument("Unknown scan option", "option", sorted(unknown)[0])

        values = cls.from_env(environ)
        values.update({k: v for k, v in explicit.items() if v is not None})
        return cls(**values).validate()
