"""
Historique undo/redo — pile bornée de snapshots (tuples de racines).

Les snapshots sont de simples références vers des arbres immuables : un commit
ne recopie rien.
"""
import logging
from typing import List, Sequence

from ..config import HISTORY_LIMIT
from ..core.schemas import Node, Roots

log = logging.getLogger(__name__)


class History:
    """
    Pile de snapshots avec un curseur unique.

    Usage:
        >>> history = History(())
        >>> history.commit(new_roots)
        >>> history.undo()   # → ()
        >>> history.redo()   # → new_roots
    """

    def __init__(self, initial: Sequence[Node] = (), limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"limit doit être >= 1 (reçu {limit})")
        self.limit = limit
        self._snapshots: List[Roots] = [tuple(initial)]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Roots:
        return self._snapshots[self._cursor]

    @property
    def snapshots(self) -> List[Roots]:
        return list(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def commit(self, roots: Sequence[Node]) -> Roots:
        """Tronque après le curseur, empile, et borne la pile à limit."""
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(tuple(roots))
        overflow = len(self._snapshots) - self.limit
        if overflow > 0:
            del self._snapshots[:overflow]
        self._cursor = len(self._snapshots) - 1
        log.debug("history commit → %d/%d", self._cursor + 1, len(self._snapshots))
        return self.current

    def undo(self) -> Roots:
        """Recule d'un cran ; retourne le snapshot courant (inchangé en butée)."""
        if self.can_undo:
            self._cursor -= 1
        return self.current

    def redo(self) -> Roots:
        if self.can_redo:
            self._cursor += 1
        return self.current

    def reset(self, roots: Sequence[Node]) -> Roots:
        """Repart d'un snapshot unique (import : l'historique n'est pas conservé)."""
        self._snapshots = [tuple(roots)]
        self._cursor = 0
        return self.current
