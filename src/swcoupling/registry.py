from __future__ import annotations

from collections.abc import Iterator

from .constants import C_FREE_WEIR, C_ORIFICE, C_SUB_WEIR, CouplingType
from .errors import InvalidIndex, OutOfMemory
from .geometry import assert_pos
from .opening import Opening


class OpeningRegistry:
    """Openings of one node, kept in insertion order and indexed by id."""

    def __init__(self) -> None:
        self._openings: list[Opening] = []
        self._index: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._openings)

    def __contains__(self, opening_id: int) -> bool:
        return opening_id in self._index

    def __iter__(self) -> Iterator[Opening]:
        # Iterate a snapshot so removals during a pass cannot skip records.
        return iter(tuple(self._openings))

    def get(self, opening_id: int) -> Opening:
        try:
            return self._openings[self._index[opening_id]]
        except KeyError:
            raise InvalidIndex(f"no opening with id {opening_id}") from None

    def ids(self) -> list[int]:
        return [o.id for o in self._openings]

    def count(self) -> int:
        return len(self._openings)

    def upsert(
        self,
        opening_id: int,
        kind: int,
        area: float,
        width: float,
        orifice_coeff: float = C_ORIFICE,
        free_weir_coeff: float = C_FREE_WEIR,
        sub_weir_coeff: float = C_SUB_WEIR,
    ) -> Opening:
        """Create the opening or overwrite an existing one with the same id.

        Overwriting resets the coupling state and the flow history.
        """
        assert_pos("area", area)
        assert_pos("width", width)

        pos = self._index.get(opening_id)
        if pos is None:
            try:
                opening = Opening(opening_id, kind, float(area), float(width))
                self._openings.append(opening)
            except MemoryError as exc:
                raise OutOfMemory(f"cannot allocate opening {opening_id}") from exc
            self._index[opening_id] = len(self._openings) - 1
        else:
            opening = self._openings[pos]
            opening.kind = kind
            opening.area = float(area)
            opening.width = float(width)

        opening.orifice_coeff = float(orifice_coeff)
        opening.free_weir_coeff = float(free_weir_coeff)
        opening.sub_weir_coeff = float(sub_weir_coeff)
        opening.reset_state()
        return opening

    def close(self, opening_id: int) -> None:
        opening = self.get(opening_id)
        opening.coupling_type = CouplingType.NO_COUPLING
        opening.new_inflow = 0.0

    def open(self, opening_id: int) -> None:
        self.get(opening_id).coupling_type = CouplingType.NO_COUPLING_FLOW

    def remove(self, opening_id: int) -> None:
        pos = self._index.pop(opening_id, None)
        if pos is None:
            raise InvalidIndex(f"no opening with id {opening_id}")
        del self._openings[pos]
        for o in self._openings[pos:]:
            self._index[o.id] -= 1

    def remove_all(self) -> None:
        self._openings.clear()
        self._index.clear()

    def is_coupled(self) -> bool:
        return any(not o.is_closed for o in self._openings)

    def commit_step(self) -> None:
        for o in self._openings:
            o.old_inflow = o.new_inflow
