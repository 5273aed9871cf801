"""Name registry: who plays for which faction."""

from types import MappingProxyType

from rivalry.constants import DEFAULT_ROSTER, TRACKED_FACTIONS, UNAFFILIATED


class Roster:
    """Read-only name → faction lookup plus the two factions in the rivalry.

    Passed explicitly into parsing and aggregation so tests can build
    synthetic rosters without touching the built-in one.
    """

    def __init__(self, members, factions=TRACKED_FACTIONS):
        factions = tuple(factions)
        if len(factions) != 2 or factions[0] == factions[1]:
            raise ValueError(f"A rivalry needs exactly two distinct factions, got {factions!r}")
        self._members = MappingProxyType(dict(members))
        self._factions = factions

    @classmethod
    def default(cls):
        return cls(DEFAULT_ROSTER, TRACKED_FACTIONS)

    @property
    def factions(self):
        return self._factions

    def faction_of(self, name):
        return self._members.get(name, UNAFFILIATED)

    def tracked(self, faction):
        return faction in self._factions

    def opponent_of(self, faction):
        """The other tracked faction."""
        a, b = self._factions
        if faction == a:
            return b
        if faction == b:
            return a
        raise KeyError(faction)

    def __contains__(self, name):
        return name in self._members

    def __len__(self):
        return len(self._members)

    def __repr__(self):
        return f"Roster({len(self)} players, factions={self._factions!r})"
