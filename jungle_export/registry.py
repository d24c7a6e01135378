"""Spot identifiers shared by the phyloXML and metaXML documents."""


class IdentifierRegistry:
    """
    Hand out one string identifier per spot, in first-visit order.

    The first spot seen gets ``"0"``, the next ``"1"`` and so on. Asking
    again for a known spot returns its original identifier. A registry
    belongs to a single export run.
    """

    def __init__(self):
        self._ids = {}
        self._counter = 0

    def identifier_for(self, spot):
        ident = self._ids.get(spot)
        if ident is None:
            ident = str(self._counter)
            self._counter += 1
            self._ids[spot] = ident
        return ident

    def __contains__(self, spot):
        return spot in self._ids

    def __len__(self):
        return len(self._ids)
