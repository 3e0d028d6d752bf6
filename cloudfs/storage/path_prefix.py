"""Root prefix applied to every path crossing the adapter boundary."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PathPrefix:
    """
    Configured root segment prepended to outgoing paths and removed from
    returned ones.

    Provider paths are absolute (``/prefix/some/file``) while caller paths are
    relative (``some/file``). The provider root is the empty string.
    """

    value: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", (self.value or "").strip("/"))

    def __bool__(self) -> bool:
        return bool(self.value)

    def apply(self, path: str) -> str:
        """Turn a caller path into a provider path."""
        parts = [part for part in (self.value, (path or "").strip("/")) if part]
        if not parts:
            return ""
        return "/" + "/".join(parts)

    def strip(self, path: str) -> str:
        """Turn a provider path back into a caller path.

        The prefix is matched case-insensitively since the provider resolves
        paths without regard to case. Paths outside the prefix only lose their
        leading slash.
        """
        trimmed = (path or "").lstrip("/")
        if not self.value:
            return trimmed

        size = len(self.value)
        if trimmed[:size].lower() != self.value.lower():
            return trimmed
        rest = trimmed[size:]
        if not rest:
            return ""
        if rest.startswith("/"):
            return rest.lstrip("/")
        return trimmed
