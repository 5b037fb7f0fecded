"""Build and request state for a single path, pending reconciliation."""

from dataclasses import dataclass

from wren.errors import BothStatesDefined


@dataclass(frozen=True, slots=True)
class States:
    """All the states generated for one path in one render cycle.

    Keeps track of which strategy produced what, so amalgamation logic can
    work with that knowledge instead of a bare list. Created, consumed and
    dropped per cycle.
    """

    build_state: str | None = None
    request_state: str | None = None

    def both_defined(self) -> bool:
        """True if both build and request state are set."""
        return self.build_state is not None and self.request_state is not None

    def get_defined(self, path: str = "") -> str | None:
        """Return the only defined state.

        Returns ``None`` when neither is set. Raises ``BothStatesDefined``
        when both are set: callers that intend to merge must go through
        ``RouteStrategy.amalgamate_states`` instead.
        """
        if self.both_defined():
            raise BothStatesDefined(path)
        if self.build_state is not None:
            return self.build_state
        return self.request_state
