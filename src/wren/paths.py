"""Page paths: a route root plus the suffix of one concrete page.

Paths are stored without leading or trailing slashes, so ``"/blog/a/"``
and ``"blog/a"`` name the same page. The empty string is the site root.
"""

from __future__ import annotations

from dataclasses import dataclass


def normalize_path(path: str) -> str:
    """Strip surrounding slashes and collapse empty segments."""
    return "/".join(part for part in path.split("/") if part)


def join_path(root: str, suffix: str) -> str:
    """Join a route root and a page suffix into a full page path."""
    root = normalize_path(root)
    suffix = normalize_path(suffix)
    if root and suffix:
        return f"{root}/{suffix}"
    return root or suffix


def is_under(root: str, path: str) -> bool:
    """True if *path* is *root* itself or lies beneath it, segment-wise.

    ``blog/a`` is under ``blog``; ``blogroll`` is not.
    """
    root = normalize_path(root)
    path = normalize_path(path)
    if not root:
        return True
    return path == root or path.startswith(root + "/")


@dataclass(frozen=True, slots=True)
class PathEntry:
    """One concrete renderable page: route root plus suffix.

    ``suffix`` is empty for the route's own root page.
    """

    root: str
    suffix: str = ""

    @classmethod
    def from_full(cls, root: str, path: str) -> PathEntry:
        """Split a full page path into root and suffix.

        Raises:
            ValueError: If *path* is not under *root*.
        """
        root = normalize_path(root)
        path = normalize_path(path)
        if not is_under(root, path):
            msg = f"Path {path!r} is not under route root {root!r}."
            raise ValueError(msg)
        suffix = path[len(root):].lstrip("/") if root else path
        return cls(root, suffix)

    @property
    def full(self) -> str:
        """The full page path, used as the cache key."""
        return join_path(self.root, self.suffix)

    @property
    def is_root(self) -> bool:
        return not self.suffix

    def strategy_path(self, uses_build_paths: bool) -> str:
        """The path strategy functions receive for this page.

        Pages below the root, and every page of a route with build paths,
        receive their suffix. The root page of any other route receives
        the root.
        """
        if uses_build_paths or self.suffix:
            return self.suffix
        return self.root
